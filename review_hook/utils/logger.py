import json
import os
from typing import Optional

from review_hook.schemas.log_schema import ActionType, ReviewLogEntry

PROMPT_LOG_LIMIT = 2000
RESPONSE_LOG_LIMIT = 5000


class InteractionLogger:
    """
    Appends ReviewLogEntry records to a JSON array file.

    With no log file configured every call is a no-op, so the hook leaves
    nothing behind in the repository unless asked to.
    """

    def __init__(self, log_file: Optional[str] = None):
        self.log_file = log_file

    @property
    def enabled(self) -> bool:
        return bool(self.log_file)

    def log_startup(self, files: list, model: str, language: str) -> Optional[str]:
        """
        Log the start of a hook run.

        Returns:
            The entry id, usable as a session id (None when disabled)
        """
        entry = ReviewLogEntry(
            agent="SYSTEM",
            action=ActionType.STARTUP,
            model=model,
            details={
                "files": files,
                "language": language,
            },
            status="STARTED",
        )
        self._write_log_entry(entry)
        return entry.id if self.enabled else None

    def log_review(self, file_path: str, model: str, input_prompt: str,
                   output_response: str, status: str, extra_details: dict = None):
        """
        Log one file sent to the model.

        Args:
            file_path: File that was reviewed
            model: Model identifier used
            input_prompt: User prompt sent to the model
            output_response: Suggestions on success, error text on failure
            status: SUCCESS or FAILURE
            extra_details: Any additional context to log
        """
        details = {
            "file": file_path,
            "input_prompt": input_prompt[:PROMPT_LOG_LIMIT] if input_prompt else "",
            "output_response": output_response[:RESPONSE_LOG_LIMIT] if output_response else "",
        }
        if extra_details:
            details.update(extra_details)

        self._write_log_entry(ReviewLogEntry(
            agent="Reviewer",
            model=model,
            action=ActionType.REVIEW,
            details=details,
            status=status,
        ))

    def log_completion(self, reviewed: int, warned: bool):
        self._write_log_entry(ReviewLogEntry(
            agent="SYSTEM",
            action=ActionType.COMPLETION,
            details={"files_reviewed": reviewed, "warnings": warned},
            status="COMPLETED_WITH_WARNINGS" if warned else "COMPLETED",
        ))

    def _write_log_entry(self, entry: ReviewLogEntry):
        """Internal function to append a log entry to the file.

        A log that cannot be read or written is reported once and then
        disabled; it never stops the review.
        """
        if not self.enabled:
            return

        try:
            directory = os.path.dirname(self.log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)

            data = []
            if os.path.exists(self.log_file):
                try:
                    with open(self.log_file, 'r', encoding='utf-8') as f:
                        content = f.read().strip()
                        if content:
                            data = json.loads(content)
                except json.JSONDecodeError:
                    data = []

            if not isinstance(data, list):
                self._disable(f"{self.log_file} does not hold a JSON list")
                return

            data.append(entry.model_dump(mode="json"))

            with open(self.log_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=4, ensure_ascii=False)
        except (OSError, UnicodeDecodeError) as e:
            self._disable(str(e))

    def _disable(self, reason: str):
        print(f"Interaction log disabled: {reason}")
        self.log_file = None
