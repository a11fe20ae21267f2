from pathlib import Path

from docsummary.analysis.exceptions import AnalysisError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_system_prompt(path: Path | None = None) -> str:
    """Load the fixed analysis instruction sent as the system message.

    Args:
        path: Path to the prompt file.
              Defaults to the bundled analysis_system_prompt.txt.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_system_prompt.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisError(f"Failed to load system prompt: {exc}") from exc


def load_user_prompt_template(path: Path | None = None) -> str:
    """Load the user message template; ``{document_text}`` is substituted per call.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_user_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnalysisError(f"Failed to load user prompt template: {exc}") from exc
