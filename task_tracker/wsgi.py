"""WSGI entry point: ``gunicorn task_tracker.wsgi:app``."""

import os

from task_tracker import create_app


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
