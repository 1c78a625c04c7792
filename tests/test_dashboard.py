"""Tests for the dashboard shell and its command routing."""

import asyncio

from conftest import make_apod, make_manifest, make_photo

from nasa_dashboard.config import Config
from nasa_dashboard.dashboard import Commands, Dashboard, StatusCodes
from nasa_dashboard.formatting import get_local_iso_date
from nasa_dashboard.models import PanelStatus, RoverQuery


class TestDashboard:
    """Startup, command routing and shutdown."""

    def test_start_loads_both_panels_independently(self, gateway):
        async def run():
            dashboard = Dashboard(Config(), client=gateway)
            dashboard.start()
            await gateway.settle()

            today = get_local_iso_date()
            gateway.fail(("apod", today), RuntimeError("APOD request failed (503): down"))
            gateway.resolve(("photos", "curiosity", 1000), [make_photo()])
            gateway.resolve(("manifest", "curiosity"), make_manifest())
            await dashboard.wait_idle()
            await dashboard.close()
            return dashboard

        dashboard = asyncio.run(run())
        assert dashboard.apod.state.status is PanelStatus.FAILED
        assert dashboard.rover.state.status is PanelStatus.LOADED
        assert gateway.closed

    def test_default_query_from_config(self, gateway):
        config = Config()
        config.set("default_rover", "opportunity")
        config.set("default_sol", 9000)
        dashboard = Dashboard(config, client=gateway)
        assert dashboard.rover.committed == RoverQuery(rover="opportunity", sol=5000)

    def test_malformed_default_sol_falls_back_to_zero(self, gateway):
        config = Config()
        config.set("default_sol", [])
        dashboard = Dashboard(config, client=gateway)
        assert dashboard.rover.committed == RoverQuery(rover="curiosity", sol=0)

    def test_commands(self, gateway):
        async def run():
            dashboard = Dashboard(Config(), client=gateway)
            results = [
                await dashboard.handle_command(Commands.SET_APOD_DRAFT, {"date": "2024-01-05"}),
                await dashboard.handle_command(Commands.SUBMIT_APOD),
                await dashboard.handle_command(Commands.SET_ROVER_DRAFT_ROVER, {"rover": "spirit"}),
                await dashboard.handle_command(Commands.SET_ROVER_DRAFT_SOL, {"sol": 7000}),
                await dashboard.handle_command(Commands.SUBMIT_ROVER),
            ]
            await gateway.settle()
            gateway.resolve(("apod", "2024-01-05"), make_apod())
            await gateway.settle()
            return dashboard, results

        dashboard, results = asyncio.run(run())
        assert results == [StatusCodes.OK] * 5
        assert dashboard.apod.state.payload == make_apod()
        assert dashboard.rover.committed == RoverQuery(rover="spirit", sol=5000)
        assert ("photos", "spirit", 5000) in gateway.calls

    def test_command_errors(self, gateway):
        async def run():
            dashboard = Dashboard(Config(), client=gateway)
            return [
                await dashboard.handle_command(Commands.SET_APOD_DRAFT),
                await dashboard.handle_command(Commands.SET_ROVER_DRAFT_ROVER, {"rover": "sojourner"}),
                await dashboard.handle_command(Commands.SET_ROVER_DRAFT_SOL, {"sol": ""}),
                await dashboard.handle_command(Commands.SUBMIT_ROVER),
                await dashboard.handle_command("launch_rocket"),
            ], dashboard

        results, dashboard = asyncio.run(run())
        assert results == [
            StatusCodes.BAD_REQUEST,
            StatusCodes.NOT_FOUND,
            StatusCodes.OK,
            StatusCodes.BAD_REQUEST,
            StatusCodes.NOT_IMPLEMENTED,
        ]
        assert gateway.calls == []
        assert dashboard.rover.state.notice == "Enter a sol to retrieve imagery."
