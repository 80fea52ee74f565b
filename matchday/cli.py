"""
Matchday CLI

Command-line front-end for football-data.org:
- Follow up to 10 teams and competitions
- Merged schedule of everything you follow
- Match lists for a single competition or team
- Standings, top scorers, teams and squads

The free API plan allows ~10 requests/minute; commands that need several
requests are paced automatically and may take a while.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Awaitable, Callable, Dict, List

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from matchday.config import Config
from matchday.i18n import AppLanguage, L10n
from matchday.models import Match
from matchday.scrapers.football_data import COMPETITION_NAMES, FootballDataClient, FootballDataError
from matchday.services import (
    JSONFileBackend,
    ScheduleFilter,
    SelectionStore,
    date_window,
    filter_free_tier,
    filter_matches,
    group_matches_by_date,
    load_followed_matches,
    matches_for_competition,
    merge_matches,
    nationality_breakdown,
    sort_scorers,
    sort_teams,
    split_standings,
)
from matchday.utils.logging_config import LogContext, SecretFilter, setup_logging

logger = logging.getLogger(__name__)
console = Console()


@dataclass
class AppContext:
    settings: Dict[str, Any]
    store: SelectionStore
    l10n: L10n

    def api_key(self) -> str:
        return self.store.api_key or self.settings['api_key']

    def make_client(self) -> FootballDataClient:
        return FootballDataClient(
            credential_source=self.api_key,
            base_url=self.settings['base_url'],
            min_interval=float(self.settings['min_request_interval']),
            connect_timeout=float(self.settings['connect_timeout']),
            total_timeout=float(self.settings['total_timeout']),
        )


pass_app = click.make_pass_decorator(AppContext)


def run_api(app: AppContext, call: Callable[[FootballDataClient], Awaitable[Any]]) -> Any:
    """
    Run one API interaction with a fresh client.

    API errors are printed with their localized message and end the
    command with exit code 1. Nothing is retried.
    """
    async def _runner():
        async with app.make_client() as client:
            try:
                return await call(client)
            finally:
                logger.debug(f"API usage: {client.tracker.get_session_stats()}")
                for entry in client.tracker.recent_requests():
                    if entry['error']:
                        logger.debug(f"Failed request {entry['endpoint']}: {entry['error']} ({entry['status']})")

    if not app.api_key():
        console.print(f"[yellow]{app.l10n.text('api_key_missing')}[/yellow]")

    try:
        return asyncio.run(_runner())
    except FootballDataError as e:
        logger.error(f"API request failed: {type(e).__name__}: {e}")
        console.print(f"[red]{app.l10n.describe_error(e)}[/red]")
        raise SystemExit(1)


def _match_table(app: AppContext, matches: List[Match], title: str) -> Table:
    l10n = app.l10n
    table = Table(title=title, show_header=False, title_justify="left", box=None)
    table.add_column("time", style="dim", width=5)
    table.add_column("home", justify="right")
    table.add_column("score", justify="center", style="bold")
    table.add_column("away")
    table.add_column("status")
    table.add_column("competition", style="dim")

    for match in matches:
        if match.is_live:
            status = f"[red]{l10n.status_label(match.status)}[/red]"
        elif match.is_finished:
            status = f"[dim]{l10n.status_label(match.status)}[/dim]"
        else:
            status = l10n.status_label(match.status)
        table.add_row(
            match.local_time_text(),
            match.home_team.display_name,
            match.score_text,
            match.away_team.display_name,
            status,
            match.competition.name if match.competition else "",
        )
    return table


def _competition_title(ref, key) -> str:
    if ref is not None and ref.name:
        return ref.name
    return COMPETITION_NAMES.get(str(key), str(key))


def _print_grouped(app: AppContext, matches: List[Match], descending: bool = False):
    for label, day_matches in group_matches_by_date(matches, app.l10n.date_label, descending=descending):
        console.print(_match_table(app, day_matches, f"[bold]{label}[/bold]"))
        console.print()


@click.group()
@click.option('--lang', type=click.Choice([lang.value for lang in AppLanguage]), default=None,
              help='Display language (default: MATCHDAY_LANGUAGE or zh)')
@click.option('--state-file', type=click.Path(dir_okay=False), default=None,
              help='Selection state file (default: MATCHDAY_STATE_FILE)')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
@click.pass_context
def cli(ctx, lang, state_file, verbose):
    """Matchday - your teams, your competitions, your matchday."""
    settings = Config.load_settings()
    setup_logging(
        level='DEBUG' if verbose else Config.LOG_LEVEL,
        json_logs=Config.JSON_LOGS,
        log_dir=Config.LOG_DIR,
        enable_console=verbose,
    )

    language = AppLanguage.parse(lang or settings['language'])
    LogContext.set(command=ctx.invoked_subcommand, language=language.value)

    store = SelectionStore(JSONFileBackend(state_file or settings['state_file']))
    SecretFilter.register(store.api_key)
    SecretFilter.register(settings['api_key'])
    ctx.obj = AppContext(settings=settings, store=store, l10n=L10n(language))


# ============================================
# CONFIG COMMANDS
# ============================================

@cli.group()
def config():
    """API key and local settings."""
    pass


@config.command('set-key')
@click.argument('api_key')
@pass_app
def config_set_key(app, api_key):
    """
    Store the football-data.org API key.

    Example:
        matchday config set-key 0123456789abcdef
    """
    app.store.api_key = api_key
    SecretFilter.register(app.store.api_key)
    console.print(f"[green]{app.l10n.text('api_key_saved')}[/green]")


@config.command('show')
@pass_app
def config_show(app):
    """Show the effective configuration."""
    key = app.api_key()
    masked = f"{key[:4]}...{key[-2:]}" if len(key) > 8 else ("***" if key else "-")

    table = Table(show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("API key", masked)
    table.add_row("API", app.settings['base_url'])
    table.add_row("Request interval", f"{app.settings['min_request_interval']}s")
    table.add_row("Language", app.l10n.language.display_name)
    table.add_row("Onboarding", "done" if app.store.has_completed_onboarding else "pending")
    table.add_row("Selections", f"{app.store.total_selections()}/{app.store.max_selections}")
    console.print(table)


# ============================================
# SELECTION COMMANDS
# ============================================

@cli.group()
def follow():
    """Follow a team or competition."""
    pass


@cli.group()
def unfollow():
    """Stop following a team or competition."""
    pass


def _report_add(app: AppContext, added: bool, already: bool, name: str):
    l10n = app.l10n
    if added:
        console.print(f"[green]{l10n.text('followed', name=name)}[/green] "
                      f"[dim]({l10n.text('remaining_slots', n=app.store.remaining_slots())})[/dim]")
    elif already:
        console.print(f"[yellow]{l10n.text('already_followed', name=name)}[/yellow]")
    else:
        console.print(f"[red]{l10n.text('capacity_reached')}[/red]")
        raise SystemExit(1)


@follow.command('team')
@click.argument('team_id', type=int)
@click.argument('name')
@click.option('--image', 'crest', default=None, help='Crest image URL')
@pass_app
def follow_team(app, team_id, name, crest):
    """
    Follow a team by id.

    Example:
        matchday follow team 81 "FC Barcelona"
    """
    already = app.store.is_team_selected(team_id)
    added = app.store.add_team(team_id, name, crest)
    _report_add(app, added, already, name)


@follow.command('competition')
@click.argument('competition_id', type=int)
@click.argument('name')
@click.option('--image', 'emblem', default=None, help='Emblem image URL')
@pass_app
def follow_competition(app, competition_id, name, emblem):
    """
    Follow a competition by id.

    Example:
        matchday follow competition 2021 "Premier League"
    """
    already = app.store.is_competition_selected(competition_id)
    added = app.store.add_competition(competition_id, name, emblem)
    _report_add(app, added, already, name)


@unfollow.command('team')
@click.argument('team_id', type=int)
@pass_app
def unfollow_team(app, team_id):
    """Stop following a team."""
    name = app.store.team_names.get(team_id, app.l10n.team_fallback(team_id))
    if app.store.remove_team(team_id):
        console.print(f"[green]{app.l10n.text('unfollowed', name=name)}[/green]")
    else:
        console.print(f"[yellow]{app.l10n.text('not_followed', id=team_id)}[/yellow]")


@unfollow.command('competition')
@click.argument('competition_id', type=int)
@pass_app
def unfollow_competition(app, competition_id):
    """Stop following a competition."""
    name = app.store.competition_names.get(competition_id, app.l10n.competition_fallback(competition_id))
    if app.store.remove_competition(competition_id):
        console.print(f"[green]{app.l10n.text('unfollowed', name=name)}[/green]")
    else:
        console.print(f"[yellow]{app.l10n.text('not_followed', id=competition_id)}[/yellow]")


@cli.command('following')
@pass_app
def following(app):
    """List followed teams and competitions."""
    l10n = app.l10n
    store = app.store

    teams = Table(title=l10n.text('selected_teams_section', count=len(store.team_ids)), title_justify="left")
    teams.add_column("ID", style="cyan", justify="right")
    teams.add_column(l10n.text('team'))
    names = store.team_names
    for team_id in store.team_ids:
        teams.add_row(str(team_id), names.get(team_id) or l10n.team_fallback(team_id))
    if store.team_ids:
        console.print(teams)
    else:
        console.print(f"[dim]{l10n.text('no_teams_selected')}[/dim]")

    competitions = Table(
        title=l10n.text('selected_competitions_section', count=len(store.competition_ids)),
        title_justify="left"
    )
    competitions.add_column("ID", style="cyan", justify="right")
    competitions.add_column(l10n.text('competitions'))
    names = store.competition_names
    for competition_id in store.competition_ids:
        competitions.add_row(str(competition_id), names.get(competition_id) or l10n.competition_fallback(competition_id))
    if store.competition_ids:
        console.print(competitions)
    else:
        console.print(f"[dim]{l10n.text('no_competitions_selected')}[/dim]")

    console.print(f"\n{l10n.text('remaining_slots', n=store.remaining_slots())} "
                  f"[dim]({l10n.text('max_selections')})[/dim]")


@cli.command('reset')
@click.confirmation_option(prompt='Remove all followed teams and competitions?')
@pass_app
def reset(app):
    """Clear all selections and the onboarding flag."""
    app.store.reset_all()
    console.print(f"[green]{app.l10n.text('reset_done')}[/green]")


@cli.command('onboard')
@pass_app
def onboard(app):
    """Mark first-run setup as complete."""
    app.store.complete_onboarding()
    console.print(f"[green]{app.l10n.text('onboarding_done', n=app.store.total_selections())}[/green]")


# ============================================
# COMPETITION COMMANDS
# ============================================

@cli.command('competitions')
@click.option('--all', 'show_all', is_flag=True, help='Include competitions outside the free plan')
@pass_app
def competitions(app, show_all):
    """
    List competitions available to follow.

    Example:
        matchday competitions
    """
    result = run_api(app, lambda client: client.fetch_competitions())
    if not show_all:
        result = filter_free_tier(result, app.settings['free_tier_codes'])

    table = Table(title=app.l10n.text('competitions'), show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Code")
    table.add_column("Name")
    table.add_column("Area", style="dim")
    table.add_column("", justify="center")

    for competition in result:
        selected = "[green]✓[/green]" if app.store.is_competition_selected(competition.id) else ""
        table.add_row(
            str(competition.id),
            competition.code or "",
            competition.name,
            competition.area.name if competition.area and competition.area.name else "",
            selected,
        )
    console.print(table)


@cli.command('teams')
@click.argument('competition_id', type=int)
@pass_app
def teams(app, competition_id):
    """
    List the teams of a competition.

    Example:
        matchday teams 2021
    """
    response = run_api(app, lambda client: client.fetch_competition_teams(competition_id))

    table = Table(title=app.l10n.text('teams'), show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("TLA")
    table.add_column("Name")
    table.add_column("", justify="center")
    for team in sort_teams(response.teams or ()):
        selected = "[green]✓[/green]" if app.store.is_team_selected(team.id) else ""
        table.add_row(str(team.id), team.tla or "", team.name, selected)
    console.print(table)


@cli.command('standings')
@click.argument('competition')
@pass_app
def standings(app, competition):
    """
    Show league tables for a competition id or code.

    Example:
        matchday standings PL
    """
    l10n = app.l10n
    key = int(competition) if competition.isdigit() else competition.upper()
    response = run_api(app, lambda client: client.fetch_standings(key))
    title = _competition_title(response.competition, key)
    console.print(f"\n[bold blue]{title} - {l10n.text('standings')}[/bold blue]\n")

    if not response.standings:
        console.print(f"[dim]{l10n.text('no_standings_data')}[/dim]")
        return

    overall, groups = split_standings(response.standings)
    # League formats publish TOTAL/HOME/AWAY; only the overall table is shown
    tables = groups if groups else overall[:1]

    for group in tables:
        table = Table(title=l10n.standing_group_name(group), show_header=True, title_justify="left")
        table.add_column("#", justify="right")
        table.add_column(l10n.text('team'))
        for key_name in ('played', 'won', 'draw', 'lost', 'goal_diff', 'points'):
            table.add_column(l10n.text(key_name), justify="right")
        table.add_column(l10n.text('form'), style="dim")

        for row in group.table:
            highlight = app.store.is_team_selected(row.team.id) if row.team.id is not None else False
            style = "bold green" if highlight else None
            table.add_row(
                str(row.position),
                row.team.display_name,
                str(row.played_games),
                str(row.won),
                str(row.draw),
                str(row.lost),
                f"{row.goal_difference:+d}",
                str(row.points),
                (row.form or "").replace(",", ""),
                style=style,
            )
        console.print(table)


@cli.command('scorers')
@click.argument('competition')
@click.option('--assists', is_flag=True, help='Rank by assists instead of goals')
@click.option('--limit', default=20, type=int, help='Number of players (default: 20)')
@pass_app
def scorers(app, competition, assists, limit):
    """
    Show the top scorers of a competition.

    Example:
        matchday scorers PL --assists
    """
    l10n = app.l10n
    key = int(competition) if competition.isdigit() else competition.upper()
    response = run_api(app, lambda client: client.fetch_scorers(key, limit=limit))
    console.print(f"\n[bold blue]{_competition_title(response.competition, key)}[/bold blue]\n")

    ranked = sort_scorers(response.scorers, by_assists=assists)
    if not ranked:
        console.print(f"[dim]{l10n.text('no_assists_data' if assists else 'no_scorers_data')}[/dim]")
        return

    table = Table(title=l10n.text('top_assists' if assists else 'top_scorers'), show_header=True)
    table.add_column("#", justify="right")
    table.add_column(l10n.text('player'))
    table.add_column(l10n.text('team'), style="dim")
    table.add_column(l10n.text('matches_played'), justify="right")
    table.add_column(l10n.text('assists' if assists else 'goals'), justify="right", style="bold")

    for index, scorer in enumerate(ranked, start=1):
        table.add_row(
            str(index),
            scorer.player.name,
            scorer.team.display_name if scorer.team else "",
            str(scorer.played_matches or 0),
            str((scorer.assists if assists else scorer.goals) or 0),
        )
    console.print(table)


# ============================================
# SCHEDULE COMMANDS
# ============================================

@cli.command('schedule')
@click.option('--filter', 'schedule_filter', type=click.Choice([f.value for f in ScheduleFilter]),
              default=ScheduleFilter.UPCOMING.value, help='Which matches to show')
@pass_app
def schedule(app, schedule_filter):
    """
    Merged schedule of all followed teams and competitions.

    Issues one request per followed entry (paced at ~10/minute).

    Example:
        matchday schedule --filter results
    """
    l10n = app.l10n
    if app.store.total_selections() == 0:
        console.print(f"[dim]{l10n.text('no_teams_selected')} / {l10n.text('no_competitions_selected')}[/dim]")
        return

    console.print(f"[dim]{l10n.text('loading')}[/dim]")
    feed = run_api(app, lambda client: load_followed_matches(
        client,
        app.store,
        team_window=tuple(app.settings['team_window']),
        competition_window=tuple(app.settings['competition_window']),
    ))

    for source, error in feed.failures.items():
        console.print(f"[yellow]{source}: {l10n.describe_error(error)}[/yellow]")

    selected = ScheduleFilter(schedule_filter)
    matches = filter_matches(feed.matches, selected)
    if not matches:
        console.print(Panel.fit(l10n.text('no_schedule_message'), title=l10n.text('no_schedule')))
        return

    _print_grouped(app, matches, descending=selected == ScheduleFilter.RESULTS)

    if feed.failures:
        raise SystemExit(1)


@cli.group()
def matches():
    """Match lists for a single competition or team."""
    pass


@matches.command('competition')
@click.argument('competition_id', type=int)
@click.option('--matchday', type=int, default=None, help='Only this matchday (ignores the date window)')
@click.option('--status', default=None, help='Status filter, e.g. FINISHED or SCHEDULED')
@pass_app
def matches_competition(app, competition_id, matchday, status):
    """
    Matches of one competition around today.

    Example:
        matchday matches competition 2021 --matchday 3
    """
    l10n = app.l10n
    if matchday is None:
        date_from, date_to = date_window(date.today(), *app.settings['competition_window'])
    else:
        date_from = date_to = None

    async def _load(client):
        competition = await client.fetch_competition(competition_id)
        response = await client.fetch_competition_matches(
            competition_id,
            date_from=date_from,
            date_to=date_to,
            status=status.upper() if status else None,
            matchday=matchday,
        )
        return competition, response

    competition, response = run_api(app, _load)
    title = competition.name or l10n.competition_fallback(competition_id)
    if matchday is not None:
        title = f"{title} - {l10n.text('matchday_round', n=matchday)}"
    console.print(f"\n[bold blue]{title} - {l10n.text('matches')}[/bold blue]\n")

    ordered = merge_matches(response.matches)
    if not ordered:
        console.print(f"[dim]{l10n.text('no_schedule')}[/dim]")
        return
    _print_grouped(app, ordered)


@matches.command('team')
@click.argument('team_id', type=int)
@pass_app
def matches_team(app, team_id):
    """
    Matches of one team around today, across all its competitions.

    Example:
        matchday matches team 57
    """
    l10n = app.l10n
    date_from, date_to = date_window(date.today(), *app.settings['team_window'])
    response = run_api(app, lambda client: client.fetch_team_matches(team_id, date_from=date_from, date_to=date_to))

    name = app.store.team_names.get(team_id) or l10n.team_fallback(team_id)
    console.print(f"\n[bold blue]{name} - {l10n.text('matches')}[/bold blue]\n")

    ordered = merge_matches(response.matches)
    if not ordered:
        console.print(f"[dim]{l10n.text('no_schedule')}[/dim]")
        return
    _print_grouped(app, ordered)


@cli.command('today')
@click.option('--competition', 'competition_id', type=int, default=None, help='Only this competition id')
@pass_app
def today(app, competition_id):
    """
    Matches being played today across the plan's competitions.

    Example:
        matchday today --competition 2021
    """
    response = run_api(app, lambda client: client.fetch_today_matches())
    matches = list(response.matches)
    if competition_id is not None:
        matches = matches_for_competition(matches, competition_id)
    if not matches:
        console.print(f"[dim]{app.l10n.text('no_schedule')}[/dim]")
        return
    ordered = sorted(matches, key=lambda m: (m.competition.name if m.competition else "", m.utc_date))
    console.print(_match_table(app, ordered, app.l10n.text('today_matches')))


# ============================================
# TEAM & PERSON COMMANDS
# ============================================

@cli.command('team')
@click.argument('team_id', type=int)
@click.option('--squad/--no-squad', default=True, help='Show squad list')
@pass_app
def team(app, team_id, squad):
    """
    Team profile and squad.

    Example:
        matchday team 81
    """
    l10n = app.l10n
    result = run_api(app, lambda client: client.fetch_team(team_id))

    lines = [f"[bold]{result.name}[/bold]"]
    if result.founded:
        lines.append(f"{l10n.text('founded')}: {result.founded}")
    if result.club_colors:
        lines.append(f"{l10n.text('club_colors')}: {result.club_colors}")
    if result.venue:
        lines.append(f"{l10n.text('venue')}: {result.venue}")
    if result.address:
        lines.append(f"{l10n.text('address')}: {result.address}")
    if result.website:
        lines.append(f"{l10n.text('website')}: {result.website}")
    if result.coach and result.coach.display_name:
        lines.append(f"{l10n.text('head_coach')}: {result.coach.display_name}")
    if result.running_competitions:
        names = ", ".join(c.name for c in result.running_competitions)
        lines.append(f"{l10n.text('running_competitions')}: {names}")
    console.print(Panel.fit("\n".join(lines)))

    if not squad or not result.squad:
        return

    table = Table(title=l10n.text('squad'), show_header=True)
    table.add_column(l10n.text('shirt_number'), justify="right")
    table.add_column(l10n.text('player'))
    table.add_column(l10n.text('position'))
    table.add_column(l10n.text('nationality'), style="dim")
    table.add_column("", justify="right")
    today_date = date.today()
    for player in result.squad:
        age = player.age(today_date)
        table.add_row(
            str(player.shirt_number) if player.shirt_number is not None else "",
            player.display_name,
            l10n.position_label(player.position),
            player.nationality or "",
            l10n.text('age_years', age=age) if age is not None else "",
        )
    console.print(table)

    breakdown = nationality_breakdown(result.squad, l10n.text('other'))
    console.print("[dim]" + ", ".join(f"{nat} {count}" for nat, count in breakdown) + "[/dim]")


@cli.command('person')
@click.argument('person_id', type=int)
@pass_app
def person(app, person_id):
    """Show a player's profile."""
    l10n = app.l10n
    player = run_api(app, lambda client: client.fetch_person(person_id))

    lines = [f"[bold]{player.display_name}[/bold]"]
    lines.append(f"{l10n.text('position')}: {l10n.position_label(player.position)}")
    if player.date_of_birth:
        age = player.age()
        suffix = f" ({l10n.text('age_years', age=age)})" if age is not None else ""
        lines.append(f"{l10n.text('date_of_birth')}: {player.date_of_birth}{suffix}")
    if player.nationality:
        lines.append(f"{l10n.text('nationality')}: {player.nationality}")
    if player.shirt_number is not None:
        lines.append(f"{l10n.text('shirt_number')}: {player.shirt_number}")
    if player.contract and player.contract.until:
        lines.append(f"{l10n.text('contract_until')}: {player.contract.until}")
    console.print(Panel.fit("\n".join(lines)))


def main():
    cli()


if __name__ == "__main__":
    main()
