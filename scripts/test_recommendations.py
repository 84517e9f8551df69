#!/usr/bin/env python3
"""
Recommendation Pipeline Smoke Script

Runs the full pipeline (place lookup -> Gemini -> Mapbox geocoding ->
optional loop route) against the real providers, without starting the API.

Requires GOOGLE_API_KEY and MAPBOX_ACCESS_TOKEN (environment or .env).

Usage:
    python scripts/test_recommendations.py
    python scripts/test_recommendations.py --location "Paris"
    python scripts/test_recommendations.py --location "Kyoto" --route --profile walking
    python scripts/test_recommendations.py --suite
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from yourdayin.errors import YourDayInError
from yourdayin.schemas.recommendations import RecommendationResult
from yourdayin.services.geocoding_service import get_geocode_resolver
from yourdayin.services.recommendation_service import query_recommendations
from yourdayin.services.route_service import fetch_route


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_result(result: RecommendationResult):
    """Pretty print the pipeline result."""
    print("\n" + "=" * 60)
    print(f"CANDIDATES: {result.original_count} | RETURNED: {result.final_count}")
    print("=" * 60)

    for i, rec in enumerate(result.recommendations, 1):
        print(f"--- Place #{i} ---")
        print(f"  Name:        {rec.name}")
        print(f"  Address:     {rec.address}")
        print(f"  Time:        {rec.recommended_time}")
        print(f"  Tips:        {rec.tips}")
        print(f"  Coordinates: {list(rec.coordinates)}")
        if rec.geocoding_result:
            print(
                f"  Geocoded as: {rec.geocoding_result.place_name} "
                f"(relevance {rec.geocoding_result.relevance})"
            )
        if rec.geocoding_error:
            print(f"  ⚠️  Geocoding error: {rec.geocoding_error}")
        if rec.processing_error:
            print(f"  ⚠️  Processing error: {rec.processing_error}")
        print()


async def run_test(location: str, route: bool = False, profile: str = "driving") -> Optional[RecommendationResult]:
    """Run the pipeline for a single location."""

    missing = [key for key in ("GOOGLE_API_KEY", "MAPBOX_ACCESS_TOKEN") if not os.getenv(key)]
    if missing:
        print(f"\n⚠️  ERROR: {', '.join(missing)} not set!")
        print("   Please set them in your .env file or export them.")
        return None

    print("\n" + "=" * 60)
    print("RECOMMENDATION PIPELINE TEST (Gemini + Mapbox)")
    print("=" * 60)
    print(f"\nLocation: {location}")

    try:
        center_feature = await get_geocode_resolver().lookup_location(location)
        if center_feature is None:
            print(f"\n❌ Location '{location}' not found")
            return None
        print(f"Center:   {list(center_feature.center)} ({center_feature.place_name})")

        result = await query_recommendations(location=location, center=center_feature.center)
        print_result(result)

        if route and result.final_count > 1:
            summary = await fetch_route(
                [rec.coordinates for rec in result.recommendations],
                profile=profile,
            )
            print(f"🗺️  Route ({profile}): {summary.distance_km} km, {summary.duration_minutes} min")
            print(f"   {'Walkable 🚶' if summary.is_walkable else 'By car 🚗'}\n")

        return result

    except YourDayInError as e:
        print(f"\n❌ {e.error_code}: {e.message}\n")
        return None


async def run_test_suite():
    """Run the pipeline for a fixed list of locations."""

    locations = [
        "Paris",
        "Barrio Gótico, Barcelona",
        "Antigua Guatemala",
        "Kyoto",
        "Ushuaia",
    ]

    passed = 0
    failed = 0

    for location in locations:
        result = await run_test(location)
        # A location passes when every item has coordinates and most were geocoded
        if result and result.final_count > 0:
            geocoded = sum(1 for r in result.recommendations if r.geocoding_result)
            print(f"   Geocoded {geocoded}/{result.final_count} with the primary query")
            passed += 1
        else:
            failed += 1

        # Delay between locations to avoid rate limits
        print("\n⏳ Waiting 2 seconds before next location...")
        await asyncio.sleep(2)

    print("\n" + "=" * 60)
    print(f"Total: {len(locations)} | Passed: {passed} | Failed: {failed}")
    print("=" * 60 + "\n")


def main():
    parser = argparse.ArgumentParser(
        description="Run the recommendation pipeline locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/test_recommendations.py --location "Paris"
  python scripts/test_recommendations.py --location "Kyoto" --route --profile walking
  python scripts/test_recommendations.py --suite
        """
    )

    parser.add_argument(
        "--location",
        type=str,
        help="Place to get recommendations for (e.g., 'Paris')"
    )
    parser.add_argument(
        "--route",
        action="store_true",
        help="Also fetch the loop route through the results"
    )
    parser.add_argument(
        "--profile",
        choices=["driving", "walking", "cycling"],
        default="driving",
        help="Routing profile for --route (default: driving)"
    )
    parser.add_argument(
        "--suite",
        action="store_true",
        help="Run the full location suite"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.suite:
        asyncio.run(run_test_suite())
    else:
        location = args.location or "Paris"
        if not args.location:
            print("\nNo location provided. Running default test...\n")
        asyncio.run(run_test(location, route=args.route, profile=args.profile))


if __name__ == "__main__":
    main()
