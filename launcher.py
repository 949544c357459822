# launcher.py
import getpass
import logging
import os
import socket
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

# --- Constante ---
ENV_FILE = ".env"

# --- Configuración del logging ---
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

console = Console()


def get_lan_ip() -> str:
    """Detects the primary LAN IP (not localhost)."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.settimeout(0.1)
        # No packet is sent; connect() only selects the outgoing interface
        s.connect(("1.1.1.1", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def run_setup_wizard():
    """
    Asks for the port and the Gmail sender credentials and writes them to .env.
    """
    logging.info(f"Configurando '{ENV_FILE}'...")
    load_dotenv(ENV_FILE, encoding="utf-8")
    console.rule("AirFiber Internet Billing - setup")

    default_port = os.getenv("UVICORN_PORT", "3000")
    while True:
        port = console.input(f"Port for the web server (default {default_port}): ").strip() or default_port
        if port.isdigit() and 1024 <= int(port) <= 65535:
            break
        console.print("[red]Invalid port. Use a number between 1024 and 65535.[/red]")

    gmail_user = console.input(f"Gmail sender address ({os.getenv('GMAIL_USER', 'none')}): ").strip()
    gmail_user = gmail_user or os.getenv("GMAIL_USER", "")
    app_password = getpass.getpass("Gmail App Password (leave blank to keep): ").strip()
    app_password = app_password or os.getenv("GMAIL_APP_PASSWORD", "")

    try:
        with open(ENV_FILE, "w", encoding="utf-8") as f:
            f.write("# AirFiber Internet Billing\n")
            f.write(f"UVICORN_PORT={port}\n")
            f.write("EMAIL_PROVIDER=smtp\n")
            f.write(f'GMAIL_USER="{gmail_user}"\n')
            f.write(f'GMAIL_APP_PASSWORD="{app_password}"\n')
    except OSError as e:
        console.print(f"[red]Error saving {ENV_FILE}: {e}[/red]")
        sys.exit(1)

    console.print(f"[green]Configuration saved. Port: {port}[/green]\n")


def start_api_server():
    from uvicorn import Config, Server

    from airfiber_billing.core.config import get_settings
    from airfiber_billing.main import app as fastapi_app

    settings = get_settings()
    config = Config(
        app=fastapi_app,
        host=settings.uvicorn_host,
        port=settings.uvicorn_port,
        log_level=settings.log_level.lower(),
    )
    try:
        Server(config).run()
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    if "--config" in sys.argv or not os.path.exists(ENV_FILE):
        run_setup_wizard()
        if "--config" in sys.argv:
            console.print("Restart the launcher to apply the changes.")
            sys.exit(0)

    load_dotenv(ENV_FILE)

    port = os.getenv("UVICORN_PORT", "3000")
    console.print(
        Panel.fit(
            f"Local:     http://localhost:{port}\n"
            f"Network:   http://{get_lan_ip()}:{port}\n"
            f"Dashboard: http://localhost:{port}/dashboard",
            title="AirFiber Internet Billing",
        )
    )
    console.print("To reconfigure: python launcher.py --config")

    start_api_server()
