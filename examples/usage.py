"""
Example usage of Sulfide.

Shows explicit sessions, the short-name module, implicit waiting and soft
assertions against a couple of public pages.
"""

import asyncio
import logging

from sulfide import Session, configure
from sulfide import conditions as have
from sulfide.selectors import by_name, by_text, with_text

# Configure logging to see launches, navigation and polling
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


async def example_explicit_session():
    """Example: an explicit session with element and collection handles."""
    print("\n" + "="*60)
    print("Example 1: Explicit Session")
    print("="*60)

    config = configure(width=1024, height=768, implicit_wait_ms=6000)

    async with Session(config) as session:
        await session.open("https://news.ycombinator.com")

        stories = session.SS(".titleline > a")
        await stories.should_have(have.size_greater_than(10))
        print(f"\nTop story: {await stories.first.text()}")

        await session.S(by_text("new")).should_be(have.visible)
        page = await session.get_page()
        print(f"Viewport: {page.viewport_size}")


async def example_form_interaction():
    """Example: filling in and submitting a search form."""
    print("\n" + "="*60)
    print("Example 2: Form Interaction")
    print("="*60)

    async with Session(configure(headless=True)) as session:
        await session.open("https://duckduckgo.com")

        search = session.S(by_name("q"))
        await search.set_value("playwright python")
        await search.press("Enter")

        results = session.SS("[data-testid=result]")
        await results.should(have.size_greater_than(0))
        print(f"\nFirst result: {await results.first.text()}")


async def example_soft_assertions():
    """Example: soft assertions collect failures instead of stopping."""
    print("\n" + "="*60)
    print("Example 3: Soft Assertions")
    print("="*60)

    config = configure(soft_assertions=True, implicit_wait_ms=1000)

    async with Session(config) as session:
        await session.open("https://example.com")

        await session.S("h1").should_have(have.text("Example Domain"))
        await session.S(with_text("does not exist")).should_be(have.visible)

        print(f"\nRecorded failures: {len(session.reporter.failures)}")
        for failure in session.reporter.failures:
            print(f"  - {failure}")


async def example_short_names():
    """Example: short names bound to the default session."""
    print("\n" + "="*60)
    print("Example 4: Short Names")
    print("="*60)

    from sulfide.shortcuts import S, close, open, visible

    await open("https://example.com")
    try:
        await S("h1").should(visible)
        print(f"\nHeading: {await S('h1').text()}")
    finally:
        await close()


async def main():
    """Run all examples."""
    print("\n" + "🧪"*30)
    print("   SULFIDE - Examples")
    print("🧪"*30)

    await example_explicit_session()
    await example_form_interaction()
    await example_soft_assertions()
    await example_short_names()

    print("\n" + "="*60)
    print("All examples completed!")
    print("="*60)


if __name__ == "__main__":
    asyncio.run(main())
