from src.daily_checkin.daily_checkin.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8989, use_reloader=False)
