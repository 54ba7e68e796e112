from .demo import (  # noqa: F401
    build_message_box,
    render_errors,
    run_demo,
    validate_signup,
)

__all__ = [
    "build_message_box",
    "validate_signup",
    "render_errors",
    "run_demo",
]
