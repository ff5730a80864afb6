"""
Start the TextShelf API with uvicorn.

Usage (any working directory; the bundled data and page are found
relative to the package):
    python -m app
    textshelf        (console script, after pip install)

Host and port come from the HOST and PORT environment variables
(defaults 0.0.0.0 and 5000).
"""

import uvicorn

from app.config import settings


def main() -> None:
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
