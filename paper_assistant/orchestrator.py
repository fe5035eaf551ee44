"""Client-side flow: upload, summarize, and listen to a paper.

The orchestrator owns one SessionState and changes it only through the
state's named transitions. Each user action issues its remote calls in
order and reports the outcome as a Notification.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .audio import Playback, Player, play_audio
from .client import BackendClient
from .documents import read_paper_file
from .errors import ErrorKind, ServiceError, classify_error, error_message
from .models import DEFAULT_VOICE_ID, Paper, SummaryFormat, find_voice

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    title: str
    description: str
    variant: str = "default"


@dataclass
class SessionState:
    paper_text: str = ""
    summary: str = ""
    is_generating: bool = False
    selected_voice: str = DEFAULT_VOICE_ID
    stored_paper_id: str | None = None
    similar_papers: list[Paper] = field(default_factory=list)
    last_error: ServiceError | None = None

    def set_paper(self, text: str):
        self.paper_text = text
        self.summary = ""
        self.stored_paper_id = None
        self.similar_papers = []

    def begin_generation(self) -> bool:
        if self.is_generating:
            return False
        self.is_generating = True
        return True

    def finish_generation(self, source_text: str, summary: str | None = None):
        self.is_generating = False
        # a summary only belongs to the text it was generated from
        if summary is not None and source_text == self.paper_text:
            self.summary = summary

    def select_voice(self, voice_id: str):
        if find_voice(voice_id) is None:
            raise ValueError(f"Unknown voice: {voice_id}")
        self.selected_voice = voice_id


class Orchestrator:
    def __init__(self, backend: BackendClient | None = None, player: Player | None = None):
        self.backend = backend or BackendClient()
        self.player = player
        self.state = SessionState()
        self.notifications: list[Notification] = []
        self.playback: Playback | None = None

    def notify(self, title: str, description: str, variant: str = "default"):
        self.notifications.append(Notification(title, description, variant))
        logger.info(f"{title} {description}")

    def _fail(self, context: str, exc: Exception, description: str):
        logger.error(f"Error {context}: {exc}")
        if isinstance(exc, ServiceError):
            self.state.last_error = exc
        else:
            self.state.last_error = ServiceError(error_message(exc), classify_error(exc))
        self.notify("Error", description, "destructive")

    def select_voice(self, voice_id: str):
        self.state.select_voice(voice_id)

    async def upload(self, text: str):
        self.state.set_paper(text)
        try:
            paper = await self.backend.store_paper(text)
            self.state.stored_paper_id = paper.id
            # a failure past this point leaves the stored paper in place
            self.state.similar_papers = await self.backend.find_similar(text)
            self.notify("Success!", "Paper processed and similar papers found.")
        except Exception as e:
            self._fail("processing paper", e, "Failed to process paper. Please try again.")

    async def upload_file(self, path: str | Path):
        """Drag-and-drop entry point: read the file and upload its text."""
        try:
            text = read_paper_file(path)
        except (OSError, ValueError, RuntimeError) as e:  # RuntimeError: unreadable PDF
            error = ServiceError(f"{path}: {e}", ErrorKind.INVALID_INPUT)
            self._fail("reading file", error, "Failed to process paper. Please try again.")
            return
        await self.upload(text)

    async def generate_summary(self, fmt: SummaryFormat | str):
        fmt = fmt.value if isinstance(fmt, SummaryFormat) else fmt
        if not self.state.begin_generation():
            logger.warning("Summary generation already in progress")
            self.notify("Busy", "A summary is already being generated.")
            return

        source_text = self.state.paper_text
        summary = None
        try:
            summary = await self.backend.generate_summary(source_text, fmt)
        except Exception as e:
            self._fail("generating summary", e, "Failed to generate summary. Please try again.")
        finally:
            self.state.finish_generation(source_text, summary)

    async def text_to_speech(self, text: str):
        if not text:
            self.state.last_error = ServiceError("Empty text", ErrorKind.INVALID_INPUT)
            self.notify("Error", "Please enter some text to convert to speech.", "destructive")
            return

        try:
            audio = await self.backend.text_to_speech(text, self.state.selected_voice)
            self.playback = await play_audio(audio, self.player)
        except Exception as e:
            self._fail("converting text to speech", e, "Failed to convert text to speech. Please try again.")

    async def recent_papers(self) -> list[Paper]:
        try:
            return await self.backend.recent_papers()
        except ServiceError as e:
            logger.error(f"Error fetching papers: {e}")
            raise
