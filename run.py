"""
Application Entry Point (Runner)

Imports the Application Factory (create_app) from 'student_registration'
and starts the Flask development server.

To run the server:
(With the .venv virtual environment active)
$ python run.py
"""

from student_registration import create_app

# Creates the application instance through the factory
app = create_app()

if __name__ == "__main__":
    """
    Runs the Flask development server.

    'debug=app.config['DEBUG']' turns on debug mode (with auto-reload)
    when FLASK_DEBUG=True is set in .env.
    """
    app.run(host='0.0.0.0', port=5000, debug=app.config['DEBUG'])
