"""Development entry point: `python app.py` or `flask --app app run`."""

from src.hr_attendance.hr_attendance.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
