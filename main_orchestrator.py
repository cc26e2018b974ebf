# main_orchestrator.py
# Smoke scenario: opens BASE_URL in a local Stagehand browser and walks a few
# steps through the reliability layer.
import asyncio
import logging

from stagehand import Stagehand, StagehandConfig

from browser_session.capability import Locator
from browser_session.playwright_session import PlaywrightSession
from config.config import load_settings
from interaction.failures import StepFailure
from interaction.interactor import ReliableInteractor
from interaction.policy import RetryPolicy
from interaction.watermark import NavigationWatermark
from runner.checks import Check, aggregate_check
from runner.orchestrator import ScenarioRunner
from scenario.models import ScenarioStep

logger = logging.getLogger(__name__)


def build_steps(page, interactor: ReliableInteractor, base_url: str):
    async def open_home_page():
        await page.goto(base_url)
        await interactor.exists(Locator.tag("body"))

    async def title_is_set():
        return bool((await page.title()).strip())

    async def check_home_page():
        await aggregate_check(
            [
                Check("page has a body", lambda: interactor.exists(Locator.tag("body"))),
                Check("page has a title", title_is_set),
                Check("page has at least one link", lambda: interactor.exists(Locator.css("a[href]"))),
            ]
        )

    async def follow_first_link():
        watermark = await NavigationWatermark.capture(interactor.session)
        await interactor.click(Locator.css("a[href]"))
        await interactor.wait_for_navigation(watermark)

    return [
        ScenarioStep("Open home page", open_home_page),
        ScenarioStep("Check home page", check_home_page),
        ScenarioStep("Follow first link", follow_first_link),
    ]


async def main():
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not settings.base_url:
        print("Error: BASE_URL environment variable not set")
        raise SystemExit(1)
    if not settings.api_key:
        print("Error: GEMINI_API_KEY environment variable not set")
        raise SystemExit(1)

    config = StagehandConfig(
        env="LOCAL",
        model_name="google/gemini-2.5-flash",
        model_api_key=settings.api_key,
        ignore_https_errors=True,
        verbose=1,
    )
    stagehand = Stagehand(config)
    await stagehand.init()

    try:
        page = stagehand.page
        await page.set_viewport_size({"width": 1280, "height": 980})

        session = PlaywrightSession(page, action_timeout=settings.action_timeout)
        interactor = ReliableInteractor(session, RetryPolicy.from_settings(settings))
        runner = ScenarioRunner()

        try:
            await runner.run_async(build_steps(page, interactor, settings.base_url), name="Smoke")
        except StepFailure as e:
            logger.error(f"Scenario stopped at '{e.step_name}': {e.error}")
            raise SystemExit(1)
    finally:
        await stagehand.close()


if __name__ == "__main__":
    asyncio.run(main())
