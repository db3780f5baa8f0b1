"""Review Runner - sequential orchestration of the hook.

Launches the Ollama server, sends each eligible file to the model one at a
time and prints the result. Always returns exit code 0: the hook only warns.
"""
from typing import List, Optional

from review_hook.reporter import Reporter
from review_hook.services import FileHandlerService, LLMClientError, OllamaClient, OllamaServer
from review_hook.utils.logger import InteractionLogger
from review_hook.utils.settings import Settings


def run_review(files: List[str], settings: Settings, client: Optional[OllamaClient] = None) -> int:
    if not files:
        print("No files provided for the hook.")
        return 0

    file_service = FileHandlerService(
        extension=settings.language.extension,
        max_chars=settings.max_chars,
        max_files=settings.max_files,
    )

    # Checked before launching anything so a large commit costs nothing
    if file_service.too_many_files(files):
        print(f"Skipping as analysing more than {settings.max_files} files would take too long")
        return 0

    logger = InteractionLogger(settings.log_file)
    logger.log_startup(files, settings.model, settings.language.key)
    reporter = Reporter(settings.language.display_name)

    with OllamaServer(settings.port, settings.ollama_bin), (client or OllamaClient(settings)) as llm:
        for file_path in files:
            content = file_service.load_eligible(file_path)
            if content is None:
                continue

            request = llm.build_request(file_path, content)
            try:
                verdict = llm.send(request)
            except LLMClientError as e:
                print(f"Error querying LLM for file {file_path}: {e}")
                logger.log_review(file_path, settings.model, request.prompt, str(e), "FAILURE",
                                  extra_details={"error_type": type(e).__name__})
                continue

            logger.log_review(file_path, settings.model, request.prompt, verdict.suggestions, "SUCCESS",
                              extra_details={"follows_best_practices": verdict.follows_best_practices})
            reporter.record(file_path, verdict)

    reporter.summarize()
    logger.log_completion(reporter.reviewed, reporter.warn)
    return 0
