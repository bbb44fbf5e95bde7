import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from api.services import ephem
from api.services.orchestrators.moon_month import (
    MoonTimesRequestError,
    build_month,
    parse_moon_times_query,
)


def main(argv: list[str]) -> int:
    ephem.init_paths(os.getenv("SE_EPHE_PATH"))

    try:
        query = parse_moon_times_query(*argv[:4])
    except MoonTimesRequestError as exc:
        print(json.dumps({"error": str(exc)}), file=sys.stderr)
        return 1

    reports = build_month(query.year, query.month, query.latitude, query.longitude)
    output = json.dumps([report.model_dump(by_alias=True) for report in reports], indent=2)
    if len(argv) > 4:
        out_path = Path(argv[4])
        out_path.write_text(output, encoding="utf-8")
        print(f"Wrote {len(reports)} day reports → {out_path}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 5:
        print("Usage: python cli.py LATITUDE LONGITUDE YEAR MONTH [output.json]")
        sys.exit(1)
    sys.exit(main(sys.argv[1:]))
