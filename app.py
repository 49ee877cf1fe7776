"""Hosted entry point (e.g. Hugging Face Spaces or gunicorn)."""

from physics_playground.visualization.dash_app import app, main

server = app.server  # expose Flask server for gunicorn fallback

if __name__ == "__main__":
    main()
