import asyncio
import logging
import os
import shlex
import tempfile
from typing import Awaitable, Protocol

logger = logging.getLogger(__name__)

PLAYER_COMMAND = os.environ.get("PAPER_ASSISTANT_PLAYER", "ffplay -nodisp -autoexit -loglevel quiet")


class Player(Protocol):
    async def start(self, path: str) -> Awaitable[None]:
        """Begin playing `path`; the returned awaitable settles when playback ends."""


class CommandPlayer:
    """Plays a file with an external command such as ffplay or mpg123."""

    def __init__(self, command: str = PLAYER_COMMAND):
        self.argv = shlex.split(command)

    async def start(self, path: str) -> Awaitable[None]:
        proc = await asyncio.create_subprocess_exec(
            *self.argv, path,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        return asyncio.ensure_future(self._wait(proc))

    @staticmethod
    async def _wait(proc: asyncio.subprocess.Process):
        code = await proc.wait()
        if code != 0:
            raise RuntimeError(f"Player exited with status {code}")


class Playback:
    """A transient audio file that lives until playback ends."""

    def __init__(self, path: str):
        self.path = path
        self.released = False
        self._task: asyncio.Task | None = None

    def release(self):
        if self.released:
            return
        self.released = True
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        logger.debug(f"Released {self.path}")

    def watch(self, ended: Awaitable[None]):
        async def _on_ended():
            await ended
            self.release()

        self._task = asyncio.ensure_future(_on_ended())
        self._task.add_done_callback(self._log_failure)

    @staticmethod
    def _log_failure(task: asyncio.Task):
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Playback failed: {task.exception()}")

    async def wait(self):
        """Wait for playback to end; re-raises a playback failure."""
        if self._task is not None:
            await self._task


async def play_audio(data: bytes, player: Player | None = None) -> Playback:
    player = player or CommandPlayer()
    fd, path = tempfile.mkstemp(suffix=".mp3", prefix="paper-assistant-")
    with os.fdopen(fd, "wb") as f:
        f.write(data)

    playback = Playback(path)
    ended = await player.start(path)
    playback.watch(ended)
    return playback
