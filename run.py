import logging
from puzzle_hub import create_app

logging.basicConfig(
    level=logging.INFO,   # <-- allow INFO and above
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

app = create_app("puzzle_hub.config.DevelopmentConfig")

if __name__ == "__main__":
    with app.app_context():
        from puzzle_hub.db import db
        db.create_all()
    # bind to all interfaces so a browser outside WSL/containers can reach it
    app.run(host="0.0.0.0", port=5000, debug=True)
