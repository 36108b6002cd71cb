"""MU/TH/UR 6000 — launcher. Opens the terminal chat, or serves the API."""

import argparse
import asyncio
import logging
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = os.getenv("PORT", "13026")


def serve(env: dict[str, str], reload: bool) -> None:
    cmd = ["uvicorn", "backend.app:app", "--host", HOST, "--port", PORT]
    if reload:
        cmd.append("--reload")
    print(f"Starting MU/TH/UR API on http://{HOST}:{PORT}/api ...")
    proc = subprocess.Popen(cmd, cwd=ROOT, env=env)

    def shutdown(*_):
        print("\nShutting down...")
        proc.terminate()
        proc.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)
    proc.wait()


def chat(data_dir: Path, bell: bool) -> None:
    from backend import storage
    from mother.clock import LoopClock
    from mother.providers import ProviderGateway
    from mother.reference import ReferenceStore
    from mother.router import CommandRouter
    from mother.session import ChatSession
    from mother.terminal import run_terminal

    storage.init_storage(data_dir)

    def ring(sound: str) -> None:
        if bell and sound == "beep":
            sys.stdout.write("\a")
            sys.stdout.flush()

    session = ChatSession(
        router=CommandRouter(ReferenceStore(), ProviderGateway()),
        settings=storage.StoredSettings(),
        clock=LoopClock(),
        on_sound=ring,
    )
    asyncio.run(run_terminal(session))


def main():
    parser = argparse.ArgumentParser(description="MU/TH/UR 6000 interface")
    parser.add_argument("--serve", action="store_true",
                        help="Serve the HTTP API instead of opening the terminal")
    parser.add_argument("--reload", action="store_true",
                        help="With --serve: restart the server on code changes")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Settings storage directory (default: ./data)")
    parser.add_argument("--no-bell", action="store_true",
                        help="Never ring the terminal bell")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug output to stderr")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    data_dir = args.data_dir or Path(os.getenv("DATA_DIR", str(ROOT / "data")))

    if args.serve:
        env = os.environ.copy()
        env["DATA_DIR"] = str(data_dir.resolve())
        serve(env, args.reload)
    else:
        chat(data_dir, bell=not args.no_bell)


if __name__ == "__main__":
    main()
