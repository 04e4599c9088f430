#!/usr/bin/env python
"""Build the contributor leaderboards for a list of repositories and print them as JSON."""

import argparse
import asyncio
import json
import sys

from contrib_leaderboard.core.config import get_settings
from contrib_leaderboard.services.leaderboard_service import (
    LeaderboardService,
    repository_refs_from_projects,
)


async def build(projects: list[str], include_diagnostics: bool) -> dict | list:
    repositories = repository_refs_from_projects(projects)
    if not repositories:
        print("No valid repositories given", file=sys.stderr)

    service = LeaderboardService(get_settings())
    report = await service.build_report(repositories)

    for diagnostic in report.diagnostics:
        print(
            f"Skipped {diagnostic.repository}: {diagnostic.reason} ({diagnostic.detail})",
            file=sys.stderr,
        )

    if include_diagnostics:
        return report.model_dump(mode="json")
    return [result.model_dump(mode="json") for result in report.results]


def main() -> None:
    parser = argparse.ArgumentParser(description="Build cross-repository contributor leaderboards")
    parser.add_argument(
        "repositories",
        nargs="+",
        help="Repositories as owner/name or https://github.com/owner/name",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Include per-repository diagnostics in the output",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    args = parser.parse_args()

    output = asyncio.run(build(args.repositories, args.report))
    print(json.dumps(output, indent=args.indent))


if __name__ == "__main__":
    main()
