from __future__ import annotations

from dotenv import load_dotenv

# Pick up UBIDOTS_TOKEN / VONAGE_API_SECRET etc. from a local .env in dev.
load_dotenv()
