"""슬러그 생성 유틸리티.

Slug helper — lowercase, ASCII-folded, URL-safe identifiers.
"""

import re
import unicodedata


def slugify(value: str) -> str:
    """제목을 URL용 슬러그로 변환합니다.

    "Café Crème 2x" -> "cafe-creme-2x"
    """
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = value.strip().lower()
    value = re.sub(r"[^a-z0-9]+", "-", value)
    return value.strip("-")
