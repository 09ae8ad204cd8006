import os
import socket

from fmcsa_viewer.logging_config import configure_logging
from fmcsa_viewer.ui.dash_app import create_dash_app

configure_logging()

CONFIG_ROOT = os.getenv("FMCSA_VIEWER_CONFIG", "config")

app = create_dash_app(CONFIG_ROOT)
# WSGI entry point, e.g. `gunicorn app:server`
server = app.server


def first_open_port(preferred: int, attempts: int = 50) -> int:
    """preferred if nothing listens on it, else the next free port; preferred when all are taken."""
    for port in range(preferred, preferred + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
            if probe.connect_ex(("127.0.0.1", port)) != 0:
                return port
    return preferred


if __name__ == "__main__":
    port = first_open_port(int(os.getenv("PORT", "8050")))
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=port,
        debug=os.getenv("DEBUG", "0") == "1",
    )
