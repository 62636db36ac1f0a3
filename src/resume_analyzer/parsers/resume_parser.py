import re
from pathlib import Path

# Zero-width and formatting characters left behind by copy/paste and exports
_INVISIBLE_PATTERN = r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]"

SUPPORTED_SUFFIXES = (".pdf", ".docx", ".txt", ".md")


def parse_resume(file_path: str | Path) -> str:
    """Parse a resume file (PDF, DOCX, TXT, MD) and return clean plain text."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return clean_text(_parse_pdf(path))
    elif suffix == ".docx":
        return clean_text(_parse_docx(path))
    elif suffix in (".txt", ".md"):
        return clean_text(path.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")


def clean_text(text: str) -> str:
    """Tidy text extracted from a resume file.

    Removes invisible unicode artifacts, trailing whitespace and runs of
    blank lines. Indentation and bullets are kept as written.
    """
    text = re.sub(_INVISIBLE_PATTERN, "", text)
    lines = [line.rstrip() for line in text.splitlines()]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _parse_pdf(path: Path) -> str:
    import fitz  # pymupdf

    doc = fitz.open(str(path))
    text = []
    for page in doc:
        text.append(page.get_text())
    doc.close()
    return "\n".join(text)


def _parse_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())
