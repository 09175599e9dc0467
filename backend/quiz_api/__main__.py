import uvicorn

from .settings import Settings


def main() -> None:
	settings = Settings()
	# The app is built on startup, not at import time
	uvicorn.run("quiz_api.main:create_app", factory=True, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
	main()
