from pathlib import Path

FIXTURES_DIR = Path(__file__).resolve().parent
SPRING_DEMO = FIXTURES_DIR / "spring_demo.txt"


def read_fixture(path: Path = SPRING_DEMO) -> str:
    return path.read_text(encoding="utf-8")
