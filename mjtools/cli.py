from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mjtools.config import settings
from mjtools.errors import MahjongError
from mjtools.hand_scoring import score
from mjtools.notation import build_agari_context, format_tiles, parse_kinds
from mjtools.partition_table import write_table
from mjtools.schemas import ContextInput, HandInput, MeldInput, MeldType, ScoreResult, ShantenVariant
from mjtools.shanten import chiitoitsu_shanten, effective_tiles, kokushi_shanten, normal_shanten
from mjtools.tiles import Wind

logger = logging.getLogger(__name__)

_MELD_OPTIONS = (
    ("chi", MeldType.chi),
    ("pon", MeldType.pon),
    ("ankan", MeldType.ankan),
    ("minkan", MeldType.kan),
    ("kakan", MeldType.kakan),
)
_SITUATION_FLAGS = (
    "tsumo",
    "riichi",
    "double_riichi",
    "ippatsu",
    "haitei",
    "rinshan",
    "chankan",
    "nagashi_mangan",
    "tenhou",
    "chiihou",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mjtools", description="Mahjong shanten and score calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    shanten_cmd = sub.add_parser("shanten", help="shanten number and effective tiles")
    shanten_cmd.add_argument("hand", help="tiles, e.g. '123m456p789s東東白'")
    shanten_cmd.add_argument("--variant", choices=[v.value for v in ShantenVariant], default=None)

    score_cmd = sub.add_parser("score", help="score a completed hand")
    score_cmd.add_argument("hand", help="concealed tiles without the winning tile")
    score_cmd.add_argument("win", help="winning tile")
    score_cmd.add_argument("-p", "--player", choices=[w.value for w in Wind], required=True, help="seat wind")
    score_cmd.add_argument("-r", "--round", dest="round_wind", choices=[w.value for w in Wind], required=True)
    for option, _ in _MELD_OPTIONS:
        score_cmd.add_argument(f"--{option}", action="append", default=[], metavar="TILES")
    score_cmd.add_argument("--dora", default="", help="dora indicators")
    score_cmd.add_argument("--uradora", default="", help="ura dora indicators")
    score_cmd.add_argument("--honba", type=int, default=0)
    score_cmd.add_argument("--riichi-sticks", type=int, default=0)
    for flag in _SITUATION_FLAGS:
        score_cmd.add_argument(f"--{flag.replace('_', '-')}", action="store_true")

    table_cmd = sub.add_parser("table", help="write the per-suit partition table")
    table_cmd.add_argument("out", type=Path)
    return parser


def _run_shanten(args: argparse.Namespace) -> None:
    kinds = parse_kinds(args.hand)
    normal = normal_shanten(kinds)
    chiitoitsu = chiitoitsu_shanten(kinds)
    kokushi = kokushi_shanten(kinds)
    print(f"shanten: {min(normal, chiitoitsu, kokushi)}")
    print(f"  normal: {normal}  chiitoitsu: {chiitoitsu}  kokushi: {kokushi}")
    if len(kinds) % 3 == 1:
        variant = ShantenVariant(args.variant) if args.variant else None
        tiles = effective_tiles(kinds, variant)
        print(f"effective tiles: {' '.join(format_tiles([k]) for k in tiles)}")


def _score_inputs(args: argparse.Namespace) -> tuple[HandInput, ContextInput]:
    melds = [
        MeldInput(type=meld_type, tiles=text)
        for option, meld_type in _MELD_OPTIONS
        for text in getattr(args, option)
    ]
    hand = HandInput(closed_tiles=args.hand, melds=melds, win_tile=args.win)
    context = ContextInput(
        seat_wind=Wind(args.player),
        round_wind=Wind(args.round_wind),
        dora_indicators=args.dora,
        ura_dora_indicators=args.uradora,
        honba=args.honba,
        riichi_sticks=args.riichi_sticks,
        **{flag: getattr(args, flag) for flag in _SITUATION_FLAGS},
    )
    return hand, context


def format_result(result: ScoreResult) -> str:
    lines = [f"{item.name.value} {item.han}" for item in result.yaku]
    if result.yakuman:
        lines.append(result.point_label)
    else:
        lines.append(f"{result.han} han {result.fu} fu ({result.point_label})")
    points = result.points
    if points.ron:
        lines.append(f"ron: {points.ron}")
    elif points.tsumo_dealer_pay:
        lines.append(f"tsumo: {points.tsumo_non_dealer_pay}/{points.tsumo_dealer_pay}")
    else:
        lines.append(f"tsumo: {points.tsumo_non_dealer_pay} all")
    lines.append(f"total received: {result.payments.total_received}")
    return "\n".join(lines)


def _run_score(args: argparse.Namespace) -> None:
    hand, context = _score_inputs(args)
    result = score(build_agari_context(hand, context), settings.rule_config())
    print(format_result(result))


def _run_table(args: argparse.Namespace) -> None:
    written = write_table(args.out)
    print(f"wrote {written} entries to {args.out}")


_COMMANDS = {
    "shanten": _run_shanten,
    "score": _run_score,
    "table": _run_table,
}


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_parser().parse_args(argv)
    try:
        _COMMANDS[args.command](args)
    except MahjongError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
