"""Entry point for running the Peso Watcher Flask app."""

from __future__ import annotations

import os

from dotenv import load_dotenv

from app import create_app


def _prepare_environment() -> None:
    """Load environment variables from a `.env` file beside this script."""

    project_root = os.path.abspath(os.path.dirname(__file__))
    env_file = os.path.join(project_root, ".env")
    if os.path.exists(env_file):
        load_dotenv(env_file)


def main() -> None:
    """Create the Flask app and run the development server."""

    _prepare_environment()

    app = create_app(config_name=os.getenv("APP_ENV"))

    host = os.getenv("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_RUN_PORT", "5000"))
    app.run(host=host, port=port, debug=app.config.get("DEBUG", False), use_reloader=False)


if __name__ == "__main__":
    main()
