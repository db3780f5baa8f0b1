"""Reporter - prints per-file warnings and the final summary line."""

from review_hook.schemas.review_responses import Verdict

SEPARATOR = "--------------------------------------------"


class Reporter:

    def __init__(self, language_name: str):
        self.language_name = language_name
        self.warn = False
        self.reviewed = 0

    def record(self, file_path: str, verdict: Verdict):
        """Print the suggestions for a failing file and remember that one failed."""
        self.reviewed += 1
        if verdict.follows_best_practices:
            return

        self.warn = True
        print(f"\nFile: {file_path} does not follow best practices:")
        print(f"Suggestions: {verdict.suggestions}")
        print(SEPARATOR)

    def summarize(self):
        if self.warn:
            print(
                f"\nWarning: Some files do not follow {self.language_name} best practices. "
                "Please review the suggestions above."
            )
        else:
            print(f"All checked files follow {self.language_name} best practices.")
