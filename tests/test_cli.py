from app.api import cli
from tests.conftest import PNG_BYTES


def test_writes_decoded_image(tmp_path, hf_token, upstream, capsys):
    output = tmp_path / "fox.png"

    code = cli.main(["a red fox", "--model", "org/model", "--output", str(output)])

    assert code == 0
    assert output.read_bytes() == PNG_BYTES
    assert upstream.calls[0]["model"] == "org/model"
    assert str(output) in capsys.readouterr().out


def test_missing_token_exits_with_usage_error(tmp_path, upstream, monkeypatch, capsys):
    monkeypatch.delenv("HF_TOKEN", raising=False)

    code = cli.main(["a red fox", "--output", str(tmp_path / "x.png")])

    assert code == 2
    assert "HF_TOKEN" in capsys.readouterr().err
    assert upstream.calls == []


def test_empty_prompt_exits_with_usage_error(hf_token, upstream):
    assert cli.main([""]) == 2
    assert upstream.calls == []


def test_whitespace_prompt_is_sent_upstream(tmp_path, hf_token, upstream):
    code = cli.main(["   ", "--output", str(tmp_path / "x.png")])

    assert code == 0
    assert upstream.calls[0]["inputs"] == "   "


def test_upstream_failure_exits_nonzero(tmp_path, hf_token, upstream, capsys):
    upstream.returns_json('{"error": "Model is loading", "estimated_time": 4.0}')
    output = tmp_path / "x.png"

    code = cli.main(["a red fox", "--output", str(output)])

    assert code == 1
    assert not output.exists()
    assert "[503]" in capsys.readouterr().err
