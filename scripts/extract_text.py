#!/usr/bin/env python3
"""
Точка входа для извлечения текста без установки пакета.

Использование:
    python scripts/extract_text.py path/to/scan.pdf
    python scripts/extract_text.py path/to/photo.jpg --lang en-US
"""

import sys
from pathlib import Path

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from powerocr.cli import main


if __name__ == "__main__":
    sys.exit(main())
