import argparse
import logging
import sys
from datetime import date

from health_charts import build_all_charts, export_charts, render_overview_png
from health_io import ExportError, load_exports, write_processed
from health_paths import CHARTS, DEFAULT_BINS, PROC, ensure_dirs, export_sources
from health_preprocess import filter_window, prepare_all


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Clean Samsung Health exports and optionally export charts.")
    p.add_argument("--pedometer", help="pedometer day summary export (path or URL)")
    p.add_argument("--heart-rate", dest="heart_rate", help="heart rate export (path or URL)")
    p.add_argument("--floors", help="floors climbed export (path or URL)")
    p.add_argument("--out", default=str(PROC), help="directory for cleaned CSV files")
    p.add_argument("--start", type=date.fromisoformat, help="window start (YYYY-MM-DD) for chart export")
    p.add_argument("--end", type=date.fromisoformat, help="window end (YYYY-MM-DD) for chart export")
    p.add_argument("--charts-dir", default=str(CHARTS))
    p.add_argument("--bins", type=int, default=DEFAULT_BINS)
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(message)s", datefmt="%H:%M")
    ensure_dirs()

    sources = export_sources({"pedometer": args.pedometer, "heart_rate": args.heart_rate, "floors": args.floors})
    print("Loading inputs...")
    try:
        raw = load_exports(sources)
        frames = prepare_all(raw)
    except (ExportError, ValueError) as e:
        print("Preprocessing failed:", e)
        return 1

    for name, df in frames.items():
        print(f"{name}: {len(raw[name])} raw rows -> {len(df)} cleaned rows")
    for name, path in write_processed(frames, args.out).items():
        print("Wrote", path)

    if args.start and args.end:
        if args.start > args.end:
            print("--start must not be after --end")
            return 1
        window = {name: filter_window(df, args.start, args.end) for name, df in frames.items()}
        figs = build_all_charts(window, args.start, args.end, bins=args.bins)
        paths = export_charts(figs, args.charts_dir)
        png = render_overview_png(window, f"{args.charts_dir}/overview_{args.start}_{args.end}.png")
        print(f"Exported {len(paths)} charts and {png} to {args.charts_dir}")
    elif args.start or args.end:
        print("Both --start and --end are needed to export charts; skipping")

    return 0


if __name__ == "__main__":
    sys.exit(main())
