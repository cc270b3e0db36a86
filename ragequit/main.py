# ===== IMPORTS & DEPENDENCIES =====
import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

import aiohttp

# --- Configuration ---
from ragequit.config import LOG_LEVEL, ACCOUNT_DB_PATH, API_URL

# --- Core Components ---
from ragequit.app import RageQuitApp
from ragequit.core.database import AccountDatabase
from ragequit.core.session import describe_session
from ragequit.services.auth import LOGIN

# --- Views ---
from ragequit.views.catalog_views import HomeView, LeaderboardsView, DuelView, summary_row
from ragequit.views.game_page import GamePageView
from ragequit.views.account_page import AccountView

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


# ===== COMMANDS =====
async def show_games(app: RageQuitApp, args: argparse.Namespace) -> int:
    view = HomeView(app)
    await view.load()
    for game_id, name, score, _ in (summary_row(g) for g in view.games):
        logger.info(f"#{game_id} {name}: RageScore {score}")
    logger.info(f"{len(view.games)} game(s) listed.")
    return 0


async def show_game(app: RageQuitApp, args: argparse.Namespace) -> int:
    view = GamePageView(app, args.game_id)
    await view.load()
    if view.not_found:
        logger.error(f"Game not found. (URL id: {args.game_id})")
        return 1

    detail = view.aggregate.detail
    logger.info(f"{detail['name']} - RageScore {round(detail['rage'].get('rage_score', 0))}")
    for label, width in view.rage_bars:
        logger.info(f"  {label}: {width:.0f}")
    choke = view.choke_point
    if choke:
        logger.info(
            f"  Biggest choke: {choke.achievement} ({choke.drop:.1f}% drop, "
            f"{choke.drop_from:.1f}% -> {choke.drop_to:.1f}%)"
        )
    else:
        logger.info("  Not enough achievement data yet to determine a choke point.")
    logger.info(f"  Top rage words: {', '.join(w.word for w in view.word_cloud[:10]) or '-'}")
    logger.info(f"  Reviews: {len(view.review_cards)}, posts: {len(view.post_cards)}, clips: {len(view.clips)}")
    if view.aggregate.degraded:
        logger.warning(f"  Unavailable right now: {', '.join(view.aggregate.degraded)}")
    return 0


async def show_leaderboards(app: RageQuitApp, args: argparse.Namespace) -> int:
    view = LeaderboardsView(app)
    await view.load()
    for title, caption, games in view.sections:
        logger.info(f"== {title}: {caption}")
        for index, game in enumerate(games[:args.top], start=1):
            logger.info(f"  {index}. {game['name']} ({round(game.get('rage_score') or 0)})")
    return 0


async def show_duel(app: RageQuitApp, args: argparse.Namespace) -> int:
    view = DuelView(app)
    duel = await view.select(args.left_id, args.right_id)
    if not duel or not duel.rows:
        logger.error("Both games are needed for a duel.")
        return 1
    logger.info(f"{duel.left['name']} vs {duel.right['name']}")
    for row in duel.rows:
        logger.info(f"  {row.label}: {row.left} vs {row.right} ({row.left_share:.0f}% / {row.right_share:.0f}%)")
    return 0


async def show_account(app: RageQuitApp, args: argparse.Namespace) -> int:
    outcome = await app.auth.submit(LOGIN, args.email, args.password)
    if not outcome.ok:
        logger.error(outcome.error)
        return 1
    logger.info(f"Signed in as {describe_session(app.gate)}")

    view = AccountView(app)
    await view.load()
    for trophy in view.trophies:
        logger.info(f"  [{'x' if trophy.unlocked else ' '}] {trophy.title} - {trophy.description}")
    for row in view.history.favorite_rows:
        logger.info(f"  ♥ {row.name}")
    for row in view.history.rage_rows:
        logger.info(f"  Rage {row.intensity}/5 in {row.name}{': ' + row.note if row.note else ''}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ragequit", description="Rage profiles for games.")
    parser.add_argument("--api-url", default=API_URL)
    parser.add_argument("--db", default=ACCOUNT_DB_PATH)
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("games").set_defaults(handler=show_games)

    game = commands.add_parser("game")
    game.add_argument("game_id")
    game.set_defaults(handler=show_game)

    boards = commands.add_parser("leaderboards")
    boards.add_argument("--top", type=int, default=10)
    boards.set_defaults(handler=show_leaderboards)

    duel = commands.add_parser("duel")
    duel.add_argument("left_id")
    duel.add_argument("right_id")
    duel.set_defaults(handler=show_duel)

    account = commands.add_parser("account")
    account.add_argument("--email", default=os.getenv("RAGEQUIT_EMAIL", ""))
    account.add_argument("--password", default=os.getenv("RAGEQUIT_PASSWORD", ""))
    account.set_defaults(handler=show_account)
    return parser


# ===== INITIALIZATION & STARTUP =====
async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    db = AccountDatabase(args.db)

    async with aiohttp.ClientSession() as session:
        app = RageQuitApp(session, db, api_url=args.api_url)
        await app.start()
        try:
            return await args.handler(app, args)
        finally:
            app.close()


def run() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
