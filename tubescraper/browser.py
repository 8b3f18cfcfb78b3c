from playwright.async_api import async_playwright
# Asynchronous Playwright API: the browser is driven with async/await.

from tubescraper.config import RunSettings


CHROME_ARGS = [
    "--disable-blink-features=AutomationControlled",
    # Keeps navigator.webdriver from being set, which the site checks.

    "--no-sandbox",
    # Required inside Docker and CI runners.

    "--disable-dev-shm-usage",
    # /dev/shm is tiny in containers and Chromium crashes without this.
]

UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/133.0.0.0 Safari/537.36"
)

# Below roughly 1000px the results page switches to a compact layout
# whose cards do not match the selectors in adapters/youtube.py.
VIEWPORT = {"width": 2048, "height": 1152}


async def open_browser(settings: RunSettings):
    """
    Starts Playwright, launches Chromium and creates the single browsing
    context shared by the whole run. Pages are opened per listing and per
    detail by the caller.

    Returns:
        pw: Playwright instance
        browser: Chromium browser object
        context: Browser context (cookies, localStorage, session)
    """
    pw = await async_playwright().start()

    try:
        browser = await pw.chromium.launch(
            headless=settings.headless,
            slow_mo=settings.slow_mo_ms or None,
            args=CHROME_ARGS + [f"--window-size={VIEWPORT['width']},{VIEWPORT['height']}"],
        )
        context = await browser.new_context(
            storage_state=settings.storage_state if settings.storage_state else None,
            user_agent=UA,
            viewport=VIEWPORT,
        )
    except BaseException:
        await pw.stop()
        raise

    # Hard bound on every navigation and selector wait
    context.set_default_timeout(settings.navigation_timeout_ms)
    context.set_default_navigation_timeout(settings.navigation_timeout_ms)

    return pw, browser, context


async def close_browser(pw, browser, context):
    """
    Closes Playwright resources in order: context (all pages), the
    Chromium process, then the Playwright driver itself.
    """
    try:
        await context.close()
        await browser.close()
    finally:
        await pw.stop()
