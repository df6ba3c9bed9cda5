#!/usr/bin/env python3
"""
Validate (and optionally score/preview) a template document stored as JSON.

Usage:
    python scripts/validate_template.py template.json
    python scripts/validate_template.py template.json --score --preview
    python scripts/validate_template.py template.json --rules rules.json --json
    python scripts/validate_template.py --show-config

Exit code is 1 when the template is invalid, 2 when the input cannot be read.
"""

import argparse
import json
import os
import sys

from pydantic import ValidationError as SchemaError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from template_qa import config
from template_qa.api.schemas import TemplateDocument
from template_qa.engine.policy import PolicyScanner, load_policy_rules
from template_qa.engine.validation_engine import TemplateValidationEngine
from template_qa.errors import PolicyRuleError
from template_qa.logging_config import setup_logging


def load_template(path: str) -> dict:
    """Read a template document, rejecting anything that is not template-shaped."""
    with open(path, "r") as f:
        data = json.load(f)
    return TemplateDocument.model_validate(data).to_template()


def print_report(template: dict, result, score=None, preview=None):
    name = template.get("name") or "(unnamed)"
    print(f"Template: {name}")
    print(f"Valid:    {'yes' if result.is_valid else 'no'}")

    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for e in result.errors:
            print(f"  [{e.code}] {e.field}: {e.message}")
    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for w in result.warnings:
            print(f"  [{w.code}] {w.field}: {w.message}")

    if score is not None:
        print(f"\nQuality score: {score.score}/100 ({score.rating})")
        for category in score.breakdown:
            print(f"  {category.category:<24} {category.points:+d}  {category.message}")
            if category.suggestion:
                print(f"  {'':<24}      -> {category.suggestion}")

    if preview is not None:
        print("\nPreview:")
        if preview["header"] and preview["header"].get("content"):
            print(f"  {preview['header']['content']}")
        print(f"  {preview['body']}")
        if preview["footer"]:
            print(f"  {preview['footer']}")
        for button in preview["buttons"]:
            print(f"  [ {button['text']} ]")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate a WhatsApp message template")
    parser.add_argument("template", nargs="?", help="Path to the template JSON document")
    parser.add_argument("--score", action="store_true", help="Also compute the quality score")
    parser.add_argument("--preview", action="store_true", help="Also render a preview")
    parser.add_argument("--rules", help="JSON file with policy rule overrides")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    parser.add_argument("--show-config", action="store_true", help="Print the effective configuration and exit")
    args = parser.parse_args(argv)

    if args.show_config:
        config.print_config()
        return 0
    if not args.template:
        parser.error("the template path is required")

    setup_logging(level="WARNING")

    try:
        template = load_template(args.template)
        rules = load_policy_rules(args.rules) if args.rules else None
        engine = TemplateValidationEngine(scanner=PolicyScanner(rules=rules))
    except (OSError, json.JSONDecodeError, SchemaError, PolicyRuleError) as e:
        print(f"[validate_template] ERROR: {e}", file=sys.stderr)
        return 2

    result = engine.validate_sync(template)
    score = engine.calculate_quality_score(template) if args.score else None
    preview = engine.render_preview(template) if args.preview else None

    if args.json:
        output = {"validation": result.to_dict()}
        if score is not None:
            output["qualityScore"] = score.to_dict()
        if preview is not None:
            output["preview"] = preview
        print(json.dumps(output, indent=2))
    else:
        print_report(template, result, score, preview)

    return 0 if result.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
