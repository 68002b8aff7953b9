"""
pinyinengine 命令行工具
"""

import argparse
import sys

from pinyinengine.engine.logging import get_cli_logger


def _load(path):
    from pinyinengine.io import load_dictionary
    return load_dictionary(path)


def cmd_query(args) -> int:
    from pinyinengine import EngineConfig, create_engine

    engine = create_engine(EngineConfig.from_env(top_k=args.top_k), _load(args.dict))
    for user_path in args.user or []:
        engine.merge_user_dictionary(_load(user_path))

    result = engine.process(args.pinyin)
    if result.remainder:
        get_cli_logger().warning(f"无法识别的输入: {result.remainder!r}")
    for i, c in enumerate(result.candidates, 1):
        print(f"{i}. {c.text} ({c.source})")
    return 0


def cmd_segment(args) -> int:
    from pinyinengine.engine.tokenizer import PinyinTokenizer

    result = PinyinTokenizer(default_tone=args.default_tone).segment(args.pinyin)
    print(result)
    if result.remainder:
        print(f"未识别: {result.remainder}")
        return 1
    return 0


def cmd_merge(args) -> int:
    from pinyinengine.engine.merge import merge_dictionary
    from pinyinengine.io import dump_csv

    main_db = _load(args.main)
    for user_path in args.user:
        stats = merge_dictionary(main_db, _load(user_path))
        print(f"{user_path}: 新增 {stats.added}, 累加 {stats.updated}")
    dump_csv(main_db, args.output)
    return 0


def cmd_build(args) -> int:
    from pinyinengine.io import build_dictionary, dump_csv, read_word_frequencies

    db = build_dictionary(read_word_frequencies(args.wordfreq), scale=args.scale)
    rows = dump_csv(db, args.output)
    print(f"写入 {rows} 行: {args.output}")
    return 0


def cmd_version(args) -> int:
    from pinyinengine import __version__
    print(f"pinyinengine v{__version__}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pinyinengine",
        description="pinyinengine - 拼音输入法候选生成核心",
    )

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    # query 命令
    query_parser = subparsers.add_parser("query", help="查询拼音候选")
    query_parser.add_argument("pinyin", help="拼音输入")
    query_parser.add_argument("-d", "--dict", required=True, help="主词典 (.csv / .jsonl)")
    query_parser.add_argument("-u", "--user", action="append", help="用户词典，可重复")
    query_parser.add_argument("-k", "--top-k", type=int, default=10, help="返回候选数量")
    query_parser.set_defaults(func=cmd_query)

    # segment 命令
    segment_parser = subparsers.add_parser("segment", help="切分拼音")
    segment_parser.add_argument("pinyin", help="拼音输入")
    segment_parser.add_argument("--default-tone", type=int, default=5, help="无声调音节的声调 (默认: 5)")
    segment_parser.set_defaults(func=cmd_segment)

    # merge 命令
    merge_parser = subparsers.add_parser("merge", help="把用户词典合并进主词典并导出")
    merge_parser.add_argument("main", help="主词典")
    merge_parser.add_argument("user", nargs="+", help="用户词典")
    merge_parser.add_argument("-o", "--output", required=True, help="输出 CSV")
    merge_parser.set_defaults(func=cmd_merge)

    # build 命令
    build_parser_ = subparsers.add_parser("build", help="由词频表构建词典")
    build_parser_.add_argument("wordfreq", help="词频表 (词 频率 [词性])")
    build_parser_.add_argument("-o", "--output", required=True, help="输出 CSV")
    build_parser_.add_argument("--scale", type=float, default=1.0, help="频率缩放系数")
    build_parser_.set_defaults(func=cmd_build)

    # version 命令
    version_parser = subparsers.add_parser("version", help="显示版本")
    version_parser.set_defaults(func=cmd_version)

    return parser


def main(argv=None) -> int:
    """命令行入口"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    from pinyinengine.io import DictionaryFormatError

    try:
        return args.func(args)
    except (DictionaryFormatError, OSError, ValueError) as e:
        get_cli_logger().error(f"{args.command} 失败: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
