#!/usr/bin/env python
"""
Damage Aid - End-to-End Wizard Demo

Runs the full flow in-process:
1. Profile creation
2. Photo ingestion
3. Simulated damage analysis
4. Results (cost, health risks, budget match, contractors)
5. Optional PDF report

Usage:
    python scripts/demo_assessment.py photo1.jpg photo2.jpg --budget '$20,000'
    python scripts/demo_assessment.py photo.jpg --seed 42 --delay 0 --pdf report.pdf
"""

import argparse
import asyncio
from pathlib import Path

from damage_aid.classifier import RandomDamageClassifier
from damage_aid.flow import AssessmentSession, read_photos
from damage_aid.reports import generate_pdf_report
from damage_aid.storage import InMemoryStore


async def run_demo(args: argparse.Namespace) -> None:
    session = AssessmentSession(
        store=InMemoryStore(),
        classifier=RandomDamageClassifier(seed=args.seed),
        analysis_delay=args.delay,
    )

    print('=' * 60)
    print('DAMAGE AID - END-TO-END WIZARD DEMO')
    print('=' * 60)

    print('\n[1] PROFILE')
    profile = session.create_profile(args.name, args.address, args.budget, consent=True)
    print(f'   [OK] {profile.name} @ {profile.address} (budget: {profile.budget})')

    print('\n[2] PHOTOS')
    photos = await read_photos(args.photos)
    session.upload_photos(photos)
    print(f'   [OK] {len(photos)} photo(s) uploaded')

    print('\n[3] ANALYSIS')
    analysis = await session.analyze()
    print(f'   [OK] Detected {analysis.type} ({analysis.severity}) with {analysis.confidence} confidence')

    print('\n[4] RESULTS')
    view = session.results()
    estimate = view.estimate
    print(f'   - Estimated cost: ${estimate.estimated_cost:,}')
    print(f'   - Budget status: {estimate.budget_match.value}')
    print(f'   - Health risk: {estimate.risk_level.value.upper()}')
    for risk in estimate.health_risks:
        print(f'     * {risk.type} [{risk.level.value}]')
    print('   - Recommended actions:')
    for recommendation in estimate.recommendations:
        print(f'     * {recommendation}')
    print('   - Contractors:')
    for contractor in estimate.contractors:
        print(f'     * {contractor.name} ({contractor.specialty}) {contractor.phone} - {contractor.rating}')

    if args.pdf:
        print('\n[5] REPORT')
        Path(args.pdf).write_bytes(generate_pdf_report(view))
        print(f'   [OK] Written to {args.pdf}')

    print()
    print('=' * 60)


def main():
    parser = argparse.ArgumentParser(
        description="Run the Damage Aid wizard end to end"
    )
    parser.add_argument(
        "photos",
        nargs="+",
        help="Damage photo files"
    )
    parser.add_argument("--name", default="Demo User", help="Profile name")
    parser.add_argument("--address", default="123 Main St", help="Property address")
    parser.add_argument(
        "--budget", "-b",
        default="$20,000",
        help="Budget range (default: $20,000)"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Classifier random seed (default: random)"
    )
    parser.add_argument(
        "--delay", "-d",
        type=float,
        default=3.0,
        help="Simulated analysis delay in seconds (default: 3.0)"
    )
    parser.add_argument("--pdf", default=None, help="Write a PDF report to this path")

    asyncio.run(run_demo(parser.parse_args()))


if __name__ == "__main__":
    main()
