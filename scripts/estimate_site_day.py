#!/usr/bin/env python
"""
Estimate olive canopy fAPAR and transpiration for one site-day.

Usage:
    python estimate_site_day.py --input site_day.yaml
    python estimate_site_day.py --input site_day.json --spacing-rule corrected --validate
    python estimate_site_day.py --input site_day.yaml --config oliveflux.yaml
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from oliveflux.core.config import OliveFluxConfig
from oliveflux.core.exceptions import OliveFluxError, handle_exception, ErrorContext
from oliveflux.core.types import SiteDayRequest, SpacingRule
from oliveflux.pipeline import SiteDayEstimator

logger = logging.getLogger(__name__)


def _load_document(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f) or {}


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(
        description="Estimate canopy fAPAR and transpiration for one olive orchard site-day")
    parser.add_argument("--input", required=True,
                        help="YAML or JSON document with structure and weather inputs")
    parser.add_argument("--config", default=None,
                        help="Optional YAML configuration file")
    parser.add_argument("--spacing-rule", choices=[r.value for r in SpacingRule],
                        default=None, help="Override the spacing band rule")
    parser.add_argument("--validate", action="store_true",
                        help="Check inputs before evaluating the formulas")

    args = parser.parse_args(argv)

    try:
        config = OliveFluxConfig.from_yaml(args.config) if args.config else OliveFluxConfig()
        if args.spacing_rule:
            config.interception.spacing_rule = SpacingRule(args.spacing_rule)
        if args.validate:
            config.validation.enabled = True

        logging.basicConfig(
            level=config.monitoring.log_level,
            format=config.monitoring.log_format,
        )

        request = SiteDayRequest(**_load_document(Path(args.input)))
        response = SiteDayEstimator(config).estimate_request(request)
    except (OliveFluxError, yaml.YAMLError, ValueError, KeyError, FileNotFoundError) as e:
        error = handle_exception(e, ErrorContext(component="estimate_site_day"))
        logger.error(str(error))
        return 2

    print(response.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
