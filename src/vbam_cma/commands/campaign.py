"""
VBAM Campaign Commands

Campaign management from the command line. Each command returns a
JSON-serializable dict; failures come back as {"error": kind, "message": ...}.

Includes:
- campaigns: List available campaigns
- campaign-new: Create a campaign
- campaign-delete: Delete a campaign
- campaign-show: Title, turn and record counts
- systems: List a campaign's systems with owners
- import-systems: Load systems from a CSV file
"""

import argparse
import asyncio
from dataclasses import asdict

from ..services.campaign_store import Campaign, CampaignError

# =============================================================================
# Lifecycle Commands
# =============================================================================


def cmd_campaigns(args: argparse.Namespace) -> dict:
    """List available campaigns."""
    names = Campaign.campaigns()
    return {"campaigns": names, "count": len(names)}


def cmd_campaign_new(args: argparse.Namespace) -> dict:
    """Create a new campaign."""

    async def create() -> dict:
        campaign = await Campaign.create(args.name)
        async with campaign:
            return {"status": "created", "name": campaign.name, "title": campaign.title}

    try:
        return asyncio.run(create())
    except CampaignError as e:
        return e.to_dict()


def cmd_campaign_delete(args: argparse.Namespace) -> dict:
    """Delete a campaign and its database."""
    try:
        Campaign.delete(args.name)
    except CampaignError as e:
        return e.to_dict()
    return {"status": "deleted", "name": args.name}


def cmd_campaign_show(args: argparse.Namespace) -> dict:
    """Show a campaign's title, turn and record counts."""

    async def show() -> dict:
        async with await Campaign.open(args.name) as campaign:
            return {
                "name": campaign.name,
                "title": campaign.title,
                "turn": campaign.turn,
                "systems": len(await campaign.systems()),
                "empires": len(await campaign.empires()),
                "fleets": len(await campaign.fleets()),
            }

    try:
        return asyncio.run(show())
    except CampaignError as e:
        return e.to_dict()


# =============================================================================
# System Commands
# =============================================================================


def cmd_systems(args: argparse.Namespace) -> dict:
    """List systems with resolved owner names."""

    async def list_systems() -> dict:
        async with await Campaign.open(args.campaign) as campaign:
            systems = await campaign.systems()
            return {
                "title": campaign.title,
                "systems": [asdict(s) for s in systems],
                "count": len(systems),
            }

    try:
        return asyncio.run(list_systems())
    except CampaignError as e:
        return e.to_dict()


def cmd_import_systems(args: argparse.Namespace) -> dict:
    """Import systems from a CSV file into a campaign."""

    async def run_import() -> dict:
        async with await Campaign.open(args.campaign) as campaign:
            result = await campaign.import_systems(args.file)
            return {"campaign": campaign.name, **result.to_dict()}

    try:
        return asyncio.run(run_import())
    except CampaignError as e:
        return e.to_dict()


# =============================================================================
# Parser Registration
# =============================================================================


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register campaign command parsers."""

    list_parser = subparsers.add_parser("campaigns", help="List available campaigns")
    list_parser.set_defaults(func=cmd_campaigns)

    new_parser = subparsers.add_parser("campaign-new", help="Create a new campaign")
    new_parser.add_argument("name", help="Campaign name")
    new_parser.set_defaults(func=cmd_campaign_new)

    delete_parser = subparsers.add_parser("campaign-delete", help="Delete a campaign")
    delete_parser.add_argument("name", help="Campaign name")
    delete_parser.set_defaults(func=cmd_campaign_delete)

    show_parser = subparsers.add_parser("campaign-show", help="Show campaign summary")
    show_parser.add_argument("name", help="Campaign name")
    show_parser.set_defaults(func=cmd_campaign_show)

    systems_parser = subparsers.add_parser("systems", help="List a campaign's systems")
    systems_parser.add_argument("campaign", help="Campaign name")
    systems_parser.set_defaults(func=cmd_systems)

    import_parser = subparsers.add_parser(
        "import-systems",
        help="Import systems from a CSV file (NAME,TYPE,RAW,CAP,POP,MOR,IND)",
    )
    import_parser.add_argument("campaign", help="Campaign name")
    import_parser.add_argument("file", help="Path to the CSV file")
    import_parser.set_defaults(func=cmd_import_systems)
