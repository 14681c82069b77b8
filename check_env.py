#!/usr/bin/env python3
"""Helper script to inspect the effective configuration and create a template .env file."""

from pathlib import Path
import sys

TEMPLATE = """# API Configuration
LGM_API_PREFIX=/api
LGM_LOG_LEVEL=INFO
# LGM_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list
# LGM_FRONTEND_ALLOWED_ORIGINS=http://localhost:3000,http://127.0.0.1:3000

# Catalog files
LGM_MERCHANTS_FILE=./data/merchants.csv
LGM_PRODUCTS_FILE=./data/products.csv

# Postal code lookup
LGM_ZIP_LOOKUP_BASE_URL=https://api.zippopotam.us
LGM_ZIP_LOOKUP_TIMEOUT_SECONDS=5

# Discovery
LGM_DEFAULT_RADIUS_MILES=25
LGM_FALLBACK_MERCHANT_COUNT=3
"""


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Local Goods Discovery configuration check")
    print("=" * 60)

    if env_file.exists():
        print(f"Found .env file at: {env_file}")
    else:
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env file at: {env_file}")
    print()

    sys.path.insert(0, str(project_root / "src"))
    try:
        from localgoods.config import settings
    except Exception as e:
        print(f"Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    for name, value in settings.model_dump().items():
        print(f"{name:32} {value}")
    print()

    for label, path in (("merchants", settings.merchants_file), ("products", settings.products_file)):
        marker = "ok" if path.exists() else "MISSING"
        print(f"{label:10} {path} [{marker}]")


if __name__ == "__main__":
    main()
