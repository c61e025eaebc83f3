import os
from dotenv import load_dotenv

load_dotenv()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4000"))
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "*")
# Plain text word list, one word per line. Unset means every word is accepted.
DICTIONARY_PATH = os.getenv("DICTIONARY_PATH")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
