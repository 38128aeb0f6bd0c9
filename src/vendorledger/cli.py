"""Flask CLI commands for VendorLedger."""

from __future__ import annotations

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("vendorledger-seed")
    def vendorledger_seed() -> None:
        """Load demo vendors, admins, branches and sample write-offs."""

        from .extensions import get_session_factory
        from .services.seed import seed_demo_data

        config = app.config["VENDORLEDGER_CONFIG"]
        results = seed_demo_data(get_session_factory(), **config.posting_options())
        if not results:
            click.echo("Database already has vendors; nothing seeded.")
            return
        for result in results:
            if result.success:
                click.echo(
                    f"Posted {result.write_off.fm_number}: {result.write_off.amount} "
                    f"(vendor outstanding {result.vendor.outstanding})"
                )
            else:
                click.echo(f"Seed posting failed: {result.reason.value} {result.detail or ''}")
