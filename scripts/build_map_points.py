"""
Map Points Build Script
Loads listings and prints the clustered map markers (and optional "near me" results) as JSON
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import pandas as pd

from local_greece.backend import DirectoryClient
from local_greece.datasets.listings import SAMPLE_LISTINGS, Listing
from local_greece.datasets.listings.ingest import fetch_listing_frame
from local_greece.datasets.listings.preprocess import ListingPreprocessor
from local_greece.discovery import coords_from_values
from local_greece.geo import Cluster, cluster_listings, filter_nearby, map_position
from local_greece.shared.config import Settings, get_config
from local_greece.shared.errors import LocalGreeceError
from local_greece.shared.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def load_listings(config: Settings, input_path: str | None = None) -> list[Listing]:
    """
    Load listings from a JSON export, the backend, or the bundled sample data.

    Args:
        config: Project settings
        input_path: JSON file holding a list of listing records

    Returns:
        Cleaned listings
    """
    if input_path:
        logger.info(f"Reading listings from {input_path}")
        records = json.loads(Path(input_path).read_text(encoding="utf-8"))
        df = pd.DataFrame(records)
    else:
        client = DirectoryClient.from_config(config)
        if client is None:
            logger.warning("Backend not configured, using sample listings")
            return list(SAMPLE_LISTINGS)
        df = fetch_listing_frame(client, config)

    preprocessor = ListingPreprocessor(config)
    result = preprocessor.run(df)
    if not result.success:
        raise LocalGreeceError(f"Preprocessing failed: {result.error_message}")

    logger.info(
        f"Loaded {result.rows_output} listings "
        f"({result.invalid_coordinates} without coordinates)"
    )
    return preprocessor.get_listings()


def build_points(config: Settings, listings: list[Listing]) -> list[dict[str, Any]]:
    """Cluster listings and lay them out on the 0-100 map plane."""
    bounds = config.bounding_box()
    points = []
    for point in cluster_listings(listings, bounds, radius=config.map.cluster_radius):
        position = map_position(point, bounds)
        entry: dict[str, Any] = {
            "kind": point.kind,
            "lat": point.lat,
            "lon": point.lon,
            "x": round(position.x, 3),
            "y": round(position.y, 3),
        }
        if isinstance(point, Cluster):
            entry["key"] = point.key
            entry["count"] = point.count
            entry["listing_ids"] = [listing.id for listing in point.listings]
        else:
            entry["listing_id"] = point.listing.id
        points.append(entry)
    return points


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build clustered map points for the listing map")
    parser.add_argument("--input", help="JSON file of listing records (default: backend)")
    parser.add_argument("--near", nargs=2, metavar=("LAT", "LON"), help="Also list nearby listings")
    parser.add_argument("--environment", help="Config environment (dev, prod)")
    parser.add_argument("--output", help="Write JSON here instead of stdout")
    args = parser.parse_args(argv)

    config = get_config(args.environment)
    setup_logging(config)

    try:
        listings = load_listings(config, args.input)
        output: dict[str, Any] = {"points": build_points(config, listings)}

        if args.near:
            origin = coords_from_values(*args.near)
            output["nearby"] = [
                {"listing_id": item.listing.id, "distance_km": round(item.distance_km, 3)}
                for item in filter_nearby(
                    listings,
                    origin,
                    max_distance_km=config.proximity.max_distance_km,
                    radius_km=config.proximity.earth_radius_km,
                )
            ]
    except (LocalGreeceError, OSError, ValueError) as e:
        logger.error(f"Failed to build map points: {e}")
        return 1

    text = json.dumps(output, ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        logger.info(f"Wrote {len(output['points'])} map points to {args.output}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
