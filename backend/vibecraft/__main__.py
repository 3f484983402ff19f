import uvicorn

from vibecraft.config import settings


def main() -> None:
    uvicorn.run("vibecraft.main:app", host="0.0.0.0", port=settings.SERVER_PORT)


if __name__ == "__main__":
    main()
