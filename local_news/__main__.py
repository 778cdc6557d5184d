import json
import logging
import sys

from dotenv import load_dotenv

from .config import AggregatorConfig
from .core import NewsAggregator


def main() -> int:
    # Load LOCAL_NEWS_* settings from a .env file if present.
    load_dotenv()

    config = AggregatorConfig.from_env()
    logging.basicConfig(level=config.log_level, format="%(asctime)s - %(levelname)s - %(message)s")

    result = NewsAggregator(config=config).aggregate()
    json.dump(result.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
