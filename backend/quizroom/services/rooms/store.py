import logging
import os
import tempfile
from typing import List

logger = logging.getLogger(__name__)


def _parse_score(raw: str):
    try:
        return int(raw)
    except ValueError:
        return float(raw)


class LeaderboardStore:
    """Flat-file leaderboard records, one ``leaderboard_<pin>.txt`` per room.

    Each line is ``name,score``; lines starting with ``#`` are comments.
    The record is rewritten wholesale on every save and is independent of
    whether the room is still held in memory.
    """

    def __init__(self, directory: str):
        self.directory = directory

    def path_for(self, pin: str) -> str:
        return os.path.join(self.directory, f'leaderboard_{pin}.txt')

    def exists(self, pin: str) -> bool:
        return os.path.exists(self.path_for(pin))

    def load(self, pin: str) -> List[dict]:
        """Return the stored entries for ``pin`` in file order, or [] if none."""
        path = self.path_for(pin)
        if not os.path.exists(path):
            return []
        entries = []
        with open(path, 'r', encoding='utf-8') as fh:
            for lineno, line in enumerate(fh, start=1):
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                # Names may contain commas, the score never does
                name, sep, raw_score = line.rpartition(',')
                if not sep:
                    logger.warning('[leaderboard-skip] %s:%d no separator', path, lineno)
                    continue
                try:
                    score = _parse_score(raw_score.strip())
                except ValueError:
                    logger.warning('[leaderboard-skip] %s:%d bad score %r', path, lineno, raw_score)
                    continue
                entries.append({'name': name, 'score': score})
        return entries

    def load_sorted(self, pin: str) -> List[dict]:
        # sorted() is stable, so equal scores keep their saved order
        return sorted(self.load(pin), key=lambda e: -e['score'])

    def save(self, pin: str, entries: List[dict]) -> None:
        os.makedirs(self.directory, exist_ok=True)
        lines = [f"{e['name']},{e['score']}" for e in entries]
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f'.leaderboard_{pin}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                fh.write('\n'.join(lines))
            os.replace(tmp_path, self.path_for(pin))
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug('[leaderboard-save] pin=%s entries=%d', pin, len(entries))
