"""Report source lines longer than a limit (79 by default).

usage: python scripts/check_long.py [LIMIT]

Files marked ``# flake8: noqa`` are skipped, as flake8 skips them.
Exits with status 1 when a long line is found.
"""
import sys
from pathlib import Path

root = Path(__file__).resolve().parents[1]


def long_lines(path, limit):
    text = path.read_text(encoding='utf-8')
    if text.startswith('# flake8: noqa'):
        return
    for i, line in enumerate(text.splitlines(), start=1):
        if len(line) > limit:
            yield i, line


def main(argv):
    limit = int(argv[0]) if argv else 79
    found = 0
    for folder in ('src', 'scripts', 'tests'):
        for f in sorted((root / folder).glob('*.py')):
            for i, line in long_lines(f, limit):
                print(f"{f.relative_to(root)}:{i}:{len(line)}: {line}")
                found += 1
    return 1 if found else 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
