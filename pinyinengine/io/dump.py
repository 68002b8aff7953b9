"""
词典导出（与 load_csv 相同的 CSV 格式）
"""

import csv
from pathlib import Path
from typing import Union

from pinyinengine.engine.dictionary import PinyinDictionary
from pinyinengine.engine.logging import get_io_logger

logger = get_io_logger()


def dump_csv(db: PinyinDictionary, path: Union[str, Path]) -> int:
    """
    按词典顺序导出所有 (键, 词条)

    Returns:
        写入的行数
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.writer(f, lineterminator='\n')
        for key, entry in db.items():
            writer.writerow([entry.text, key, entry.frequency])
            count += 1

    logger.info(f"导出词典: {path} ({count} 行)")
    return count
