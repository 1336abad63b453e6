import asyncio
import json
import logging
from typing import Optional

import typer
from fastapi import HTTPException

from ..core import config
from ..core.errors import ReportQueryError
from ..features.enquiries.store import EnquiryStore
from ..features.reports import service as report_service

logger = logging.getLogger(__name__)

app = typer.Typer(name="enquiry-analytics", help="CLI for inspecting the enquiry analytics data.")

REPORTS = {
    "enquiries": report_service.generate_enquiries_over_time_report,
    "models": report_service.generate_model_breakdown_report,
    "regions": report_service.generate_region_leaderboard_report,
    "categories": report_service.generate_category_breakdown_report,
    "sales-enquiries": report_service.generate_sales_vs_enquiries_report,
}


# Shared async context manager for the store
class StoreConnection:
    def __init__(self, uri: str = config.MONGO_URI, db_name: str = config.MONGO_DB_NAME):
        self.uri = uri
        self.db_name = db_name
        self.store: Optional[EnquiryStore] = None

    async def __aenter__(self) -> EnquiryStore:
        self.store = EnquiryStore.connect(self.uri, self.db_name)
        return self.store

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.store.close()


def open_store() -> StoreConnection:
    return StoreConnection()


@app.command("check-db")
def check_db_command():
    """Pings the database and prints document counts per collection."""
    asyncio.run(_check_db())

async def _check_db():
    async with open_store() as store:
        try:
            await store.ping()
            typer.secho(f"Connected to database '{config.MONGO_DB_NAME}'.", fg=typer.colors.GREEN)
            for name, count in (await store.collection_counts()).items():
                typer.echo(f"{name}: {count} document(s)")
        except ReportQueryError as e:
            typer.secho(f"Database check failed: {e.message}", fg=typer.colors.RED)
            raise typer.Exit(code=1)


@app.command("report")
def report_command(
    name: str = typer.Argument(..., help=f"Report to run: {', '.join(REPORTS)}."),
    filter: Optional[str] = typer.Option(None, "--filter", help="Time window mode: month or year."),
    value: Optional[str] = typer.Option(None, "--value", help="YYYY-MM for month, YYYY for year."),
):
    """Runs one report and prints it as JSON."""
    if name not in REPORTS:
        typer.secho(f"Error: unknown report '{name}'. Choose from: {', '.join(REPORTS)}.", fg=typer.colors.RED)
        raise typer.Exit(code=2)
    asyncio.run(_run_report(name, filter, value))

async def _run_report(name: str, filter: Optional[str], value: Optional[str]):
    async with open_store() as store:
        try:
            rows = await REPORTS[name](store, filter=filter, value=value)
        except HTTPException as e:
            typer.secho(f"Error: {e.detail}", fg=typer.colors.RED)
            raise typer.Exit(code=2)
        except ReportQueryError as e:
            typer.secho(f"Report failed: {e.message}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
    typer.echo(json.dumps([row.model_dump() for row in rows], indent=2))


@app.command("serve")
def serve_command(
    host: str = typer.Option(config.HOST, help="Interface to bind."),
    port: int = typer.Option(config.PORT, help="Port to listen on."),
):
    """Runs the API with uvicorn."""
    import uvicorn

    uvicorn.run("enquiry_analytics.main:app", host=host, port=port)


if __name__ == "__main__":
    app()
