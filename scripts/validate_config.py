#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from attempt_tracker.config.loader import ConfigLoader
from attempt_tracker.config.validation import ConfigValidator, ValidationError


def validate_overrides(loader: ConfigLoader, overrides: dict) -> List[ValidationError]:
    """Validate tracker.yaml merged with a set of overrides."""
    config = loader.merge_config(overrides)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("🔍 Validating attempt tracker configuration...")

    loader = ConfigLoader.create()
    print(f"Config directory: {loader.config_dir}")

    scenarios = {
        "file only": {},
        "in-memory backend": {"storage": {"backend": "memory"}},
        "fast ticks": {"timer": {"tick_interval_ms": 250}},
        "carry baseline on reload": {"timer": {"carry_baseline_on_reload": True}},
    }

    all_valid = True

    for name, overrides in scenarios.items():
        print(f"\n📋 Validating {name}...")

        try:
            errors = validate_overrides(loader, overrides)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"✅ {name} configuration is valid")

        except Exception as e:
            print(f"❌ Error validating {name}: {e}")
            all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
