#!/usr/bin/env python3
"""
Synthetic ECG record exporter.
Generates a full dataset through the progressive loader and writes a ZIP with
record metadata, long-format samples and a JSON manifest.

Usage:
    python scripts/generate_records.py --records 500 --output ecg_records.zip
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from ecgsim.config import SimConfig
from ecgsim.engine import ECGEngine
from ecgsim.export import bundle_records_to_zip
from ecgsim.rng import os_entropy, seeded_entropy
from ecgsim.validate import validate_store

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description='Generate synthetic ECG records')
    parser.add_argument('--output', type=Path, default=Path('./ecg_records.zip'),
                        help='Output ZIP path')
    parser.add_argument('--records', type=int, default=100, help='Number of records')
    parser.add_argument('--duration', type=int, default=5, help='Record duration (s)')
    parser.add_argument('--sample-rate', type=int, default=250, help='Sample rate (Hz)')
    parser.add_argument('--anchor', type=str, default=None,
                        help='ISO date of the first recording day')
    parser.add_argument('--format', choices=['parquet', 'csv'], default='parquet')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for reproducible (non-cryptographic) output')
    args = parser.parse_args()

    cfg = SimConfig(
        total_records=args.records,
        record_duration_s=args.duration,
        sample_rate_hz=args.sample_rate,
        anchor_date=args.anchor,
        export_format=args.format,
    )
    entropy = seeded_entropy(args.seed) if args.seed is not None else os_entropy
    engine = ECGEngine(cfg, entropy=entropy)
    engine.loader.add_listener(
        lambda done, total: logger.info(f'Progress: {done}/{total}') if done % 100 == 0 else None
    )
    engine.start()
    ticks = engine.scheduler.run_pending()
    logger.info(f'Generated {len(engine.store)} records in {ticks} scheduler ticks')

    issues = validate_store(engine.store, cfg)
    for issue in issues:
        logger.warning(issue)

    meta = {'generated_at': datetime.now().isoformat(), 'seed': args.seed}
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(bundle_records_to_zip(engine.store, cfg, meta))
    logger.info(f'Saved: {args.output} ({args.output.stat().st_size / 1024:.1f} KB)')
    return 1 if issues else 0


if __name__ == '__main__':
    sys.exit(main())
