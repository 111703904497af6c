import uvicorn

from .app import app
from .config import HOST, PORT


def main() -> None:
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":  # pragma: no cover - entry point
    main()
