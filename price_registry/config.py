import os

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "3001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# prices are unsigned 64-bit integers
MAX_PRICE = 2**64 - 1
