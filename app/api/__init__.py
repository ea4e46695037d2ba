"""Image proxy adapter package.

Architectural role:
- Defines the external interaction boundary for HTTP and CLI interfaces.
- Performs transport-level validation, CORS policy and response shaping.
- Delegates upstream work to the core layer.

Scope:
- Request lifecycle control for adapter concerns only.
- No direct upstream invocation logic is implemented in this package root.
"""
