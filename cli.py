from __future__ import annotations

import argparse
from pathlib import Path

from voicepackmerger import (
    PackConsolidator,
    TomlPackExporter,
    TomlPackLoader,
    VoicepackError,
    describe,
    export_report,
    load_program_config,
    print_merge_summary,
)
from voicepackmerger.logging_utils import log_info, log_ok, log_warn, set_verbose


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Combine several achievement voicepacks into one voicepack. "
            "Every distinct sound of every pack is kept; achievements with more than "
            "one sound become multi-sound achievements."
        )
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.toml"),
        help="Path to the program configuration TOML file.",
    )
    parser.add_argument(
        "--pack",
        action="append",
        type=Path,
        default=[],
        help="Voicepack directory or manifest to combine. Can be given several times.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory to export the combined voicepack to.",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Path to save the merge report Excel file.",
    )
    parser.add_argument(
        "--verify-against",
        type=Path,
        default=None,
        help="Previously exported voicepack to compare the combined voicepack with.",
    )
    parser.add_argument(
        "--describe",
        action="store_true",
        default=False,
        help="Print the content of the combined voicepack.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print the content of every voicepack as it is merged.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Merge and report only, do not export the combined voicepack.",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    set_verbose(args.verbose)
    config = load_program_config(args.config.expanduser())
    packs = [*config.packs, *(pack.expanduser() for pack in args.pack)]
    if not packs:
        raise SystemExit("No voicepacks given. Use --pack or the 'packs' list of the config file.")
    if not config.achievements:
        log_warn("No achievement list configured, using the achievements found in the voicepacks.")

    loader = TomlPackLoader(config.achievements)
    achievement_keys = config.achievements
    if not achievement_keys:
        achievement_keys = _discover_achievements(loader, packs)
        if not achievement_keys:
            raise SystemExit("None of the given voicepacks could be loaded.")
        loader = TomlPackLoader(achievement_keys)

    consolidator = PackConsolidator(loader, achievement_keys, combined_name=config.combined_name)
    accepted = consolidator.add_packs(str(pack) for pack in packs)
    skipped = [str(pack) for pack in packs if str(pack) not in accepted]
    for source in skipped:
        log_warn(f"Skipped voicepack that could not be loaded: {source}")
    if not accepted:
        raise SystemExit("None of the given voicepacks could be loaded.")

    print_merge_summary(consolidator)
    if args.describe:
        print(describe(consolidator.combined))

    if args.verify_against is not None:
        previous = None
        try:
            previous = loader.load(str(args.verify_against.expanduser()))
        except VoicepackError as exc:
            log_warn(f"Cannot load voicepack to verify against: {exc}")
        if consolidator.matches(previous):
            log_ok(f"Combined voicepack matches {args.verify_against}")
        else:
            log_warn(f"Combined voicepack differs from {args.verify_against}")

    report_path = args.report or config.report
    if report_path is not None:
        if report_path.suffix.lower() != ".xlsx":
            report_path = report_path / "merge_report.xlsx"
        export_report(report_path.expanduser(), consolidator)
        log_info(f"Report saved to {report_path}")

    output = args.output or config.output
    if output is not None and not args.dry_run:
        if consolidator.export(TomlPackExporter(), str(output.expanduser())):
            log_ok(f"Combined voicepack exported to {output}")
    elif args.dry_run:
        log_info("Dry run active. Combined voicepack was not exported.")
    return 0


def _discover_achievements(loader: TomlPackLoader, packs: list[Path]) -> list[str]:
    keys: dict[str, None] = {}
    for pack in packs:
        try:
            loaded = loader.load(str(pack))
        except VoicepackError:
            continue
        keys.update(dict.fromkeys(loaded.achievements))
    return list(keys)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        run(args)
    except VoicepackError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
