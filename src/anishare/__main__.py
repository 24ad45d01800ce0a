"""AniShare Admin entrypoint.

Run with:
  python -m anishare
"""

import uvicorn

from anishare.app import create_app
from anishare.config import load_settings
from anishare.logging_config import setup_logging


def app_factory():
    # uvicorn calls this in the serving process, including the reloader's child.
    settings = load_settings()
    setup_logging(settings.log_level)
    return create_app(settings)


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "anishare.__main__:app_factory",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,
    )

if __name__ == "__main__":
    main()
