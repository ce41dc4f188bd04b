import uvicorn

from employee_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "employee_api.app_factory:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    main()
