"""Run the API with uvicorn on the configured HOST and PORT: python -m exercise_api"""

import uvicorn

from exercise_api.config import settings


def main() -> None:
    uvicorn.run(
        "exercise_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
