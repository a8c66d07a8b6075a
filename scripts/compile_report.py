"""
Собрать раскладку отчёта из JSON-выгрузки и напечатать её как JSON.

Формат входа:
    {
        "assessment": {"answers": [{"q": 1, "a": 2}, ...], "survey": {"title": "..."}},
        "questions": [{"id": 1, "question": "...", "category": "..."}, ...],
        "recommendations": "## Strategy\\n- ..."  # или {"content": "..."} / null
    }

Использование:
    python scripts/compile_report.py export.json
"""
import json
import logging
import sys
import os

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def main(path: str) -> int:
    from dotenv import load_dotenv
    load_dotenv()

    from src.core.config import get_settings
    from src.core.exceptions import ReportConfigError
    from src.report import QuestionMeta, compile_report

    config = get_settings()

    # Логи в stderr, чтобы stdout оставался чистым JSON
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger("compile_report")

    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    questions = [QuestionMeta.from_dict(q) for q in payload.get("questions", [])]

    try:
        document = compile_report(
            payload.get("assessment", {}),
            payload.get("recommendations"),
            questions,
            settings=config,
        )
    except ReportConfigError as e:
        logger.error(f"❌ Invalid report configuration: {e}")
        return 2

    print(json.dumps(document.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/compile_report.py <export.json>")
        sys.exit(1)

    sys.exit(main(sys.argv[1]))
