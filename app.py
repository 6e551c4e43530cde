#!/usr/bin/env python
"""
Development server script for running the Mood Journal application.
Environment files (.env, .env.local, .env.<FLASK_ENV>, ...) are loaded when
the moodjournal package is imported.

Usage:
  FLASK_ENV=development python app.py  # Development mode with local SQLite
  FLASK_ENV=production python app.py   # Production settings, DATABASE_URL required
"""
import os
import sys
from moodjournal import create_app
from moodjournal.config.env_manager import mask_database_url

flask_env = os.environ.get('FLASK_ENV', 'development')

if __name__ == "__main__":
    if flask_env == 'production' and not os.environ.get('DATABASE_URL'):
        print("Error: DATABASE_URL must be set in production.")
        sys.exit(1)

    app = create_app()
    port = int(os.environ.get("PORT", 5000))

    print(f"Starting Mood Journal on http://localhost:{port}")
    print(f"Environment: {flask_env}")
    print(f"Database: {mask_database_url(app.config['SQLALCHEMY_DATABASE_URI'])}")
    print(f"Remote affirmations: {'enabled' if app.config.get('HUGGINGFACE_API_KEY') else 'disabled (local fallback only)'}")

    debug = os.environ.get('DEBUG', 'False').lower() == 'true'
    app.run(host=os.environ.get('HOST', '0.0.0.0'), port=port, debug=debug)
