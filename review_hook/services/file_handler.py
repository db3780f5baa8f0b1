from typing import Optional

from review_hook.utils.settings import MAX_CHARS, MAX_FILES


class FileHandlerService():
    def __init__(self, extension: str, max_chars: int = MAX_CHARS, max_files: int = MAX_FILES):
        """
        Args:
            extension: Source extension to keep (e.g. '.go')
            max_chars: Files with more characters than this are skipped
            max_files: Above this many input files nothing is reviewed
        """
        self.extension = extension
        self.max_chars = max_chars
        self.max_files = max_files

    def too_many_files(self, files: list) -> bool:
        return len(files) > self.max_files

    def matches_extension(self, file_path: str) -> bool:
        return file_path.endswith(self.extension)

    def read_file_to_text(self, file_path: str, encoding: str = 'utf-8') -> Optional[str]:
        """
        Reads the content of a given file path and returns it as a string.

        Undecodable bytes are replaced rather than treated as an error.

        Args:
            file_path (str): The path to the file you want to read.
            encoding (str): The character encoding of the file (default 'utf-8').

        Returns:
            Optional[str]: The entire content of the file, or None after
                        printing the error message.
        """
        try:
            with open(file_path, 'r', encoding=encoding, errors='replace') as file:
                return file.read()
        except OSError as e:
            # Missing file, permission denied, is a directory...
            print(f"Error reading file {file_path}: {e}")
            return None

    def load_eligible(self, file_path: str) -> Optional[str]:
        """
        Return the content of `file_path` if it should be sent for review.

        Files with another extension are skipped silently; unreadable or
        oversized files are reported and skipped.
        """
        if not self.matches_extension(file_path):
            return None

        content = self.read_file_to_text(file_path)
        if content is None:
            return None

        # len() counts code points, not bytes
        if len(content) > self.max_chars:
            print(f"Skipping file {file_path} as it has more than {self.max_chars} characters")
            return None

        return content
