"""WSGI entry point for Gunicorn."""
import os

from storefront import create_app

# Create the application instance
app = create_app()

if __name__ == "__main__":
    app.run(port=int(os.getenv('PORT', '3000')))
