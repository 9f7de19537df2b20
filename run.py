"""Local development entry point.

Usage:
    python run.py

Loads .env first so DATABASE_URL, SECRET_KEY and BUSINESS_TIMEZONE are
picked up by the config classes.
"""

from dotenv import load_dotenv

load_dotenv()  # Load .env before anything else

from app import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=5001)
