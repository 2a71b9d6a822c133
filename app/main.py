"""FastAPI application entrypoint. No business logic; only wiring.

Run with:
  uvicorn app.main:app --port 3000
or:
  python -m app.main
"""

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from app.core.config import get_settings
from app.factory import create_app

app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=get_settings().PORT)
