"""Run the arguslive API server: python -m arguslive"""

import uvicorn

from arguslive.config import Config


def main() -> None:
    uvicorn.run(
        "arguslive.api.app:app",
        host=Config.API_HOST,
        port=Config.API_PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
