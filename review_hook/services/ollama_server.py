"""
Ollama Server - launches `ollama serve` in the background for the lifetime of the hook
"""
import os
import subprocess
from typing import List, Optional

# How long to wait for `ollama serve` to exit after SIGTERM before killing it
TERMINATE_GRACE_SECONDS = 5


class OllamaServer:
    """
    Handle on a background `ollama serve` process bound to 127.0.0.1:<port>.

    Use as a context manager: leaving the block terminates the process.
    A launch failure is printed and leaves the handle inactive; requests
    made afterwards simply fail per file.
    """

    def __init__(self, port: int, binary: str = "ollama"):
        self.port = port
        self.binary = binary
        self.process: Optional[subprocess.Popen] = None

    @property
    def host(self) -> str:
        return f"127.0.0.1:{self.port}"

    def command(self) -> List[str]:
        return [self.binary, "serve"]

    def environment(self) -> dict:
        env = os.environ.copy()
        env["OLLAMA_HOST"] = self.host
        return env

    def start(self) -> bool:
        """Spawn the server. Returns False (and prints why) if it could not be started."""
        try:
            self.process = subprocess.Popen(
                self.command(),
                env=self.environment(),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            # Binary missing, not executable, etc.
            print(f"Could not start {self.binary} serve on {self.host}: {e}")
            self.process = None
            return False
        return True

    def stop(self):
        """Terminate the server if it is still running."""
        if self.process is None:
            return

        exit_code = self.process.poll()
        if exit_code is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=TERMINATE_GRACE_SECONDS)
            except subprocess.TimeoutExpired:
                self.process.kill()
                self.process.wait()
        elif exit_code != 0:
            # The server died on its own (port in use, bad install...)
            print(f"{self.binary} serve exited with status {exit_code}")

        self.process = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
