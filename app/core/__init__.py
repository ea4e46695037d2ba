"""Core orchestration package.

Architectural role:
    Holds the request-orchestration layer between the API/CLI entrypoints and
    the upstream image client.

Composition:
    - `engine`: Upstream call plus outcome classification.
    - `generation_types`: Per-request request/result contracts.

Determinism and side effects:
    Package import itself is side-effect free. Runtime side effects are performed
    by `engine` during request processing.
"""
