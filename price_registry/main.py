import uvicorn

from price_registry.config import HOST, LOG_LEVEL, PORT


def main():
    uvicorn.run(
        "price_registry.app:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
