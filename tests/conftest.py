from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient, ASGITransport


@pytest.fixture
def settings_factory():
    from easyread.config import Settings

    def _make(**overrides):
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def test_settings(settings_factory):
    return settings_factory(newsdata_api_key="test-news-key", llm_api_key=None, cron_secret=None)


@pytest.fixture
def test_db():
    from easyread.core.database import build_engine, create_tables, drop_tables, session_factory

    # Use in-memory SQLite for tests
    engine = build_engine("sqlite:///:memory:")
    TestingSessionLocal = session_factory(engine)

    create_tables(engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        drop_tables(engine)


@pytest.fixture
def article_factory(test_db):
    from easyread.models.article import EnrichedArticle

    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "original_id": f"orig-{n}",
            "title": f"Article {n}",
            "simplified_text": f"Hey listeners! Story number {n}.",
            "chinese_summary": "中文摘要",
            "core_vocabulary": ["story", "news"],
            "pub_date": datetime(2026, 1, 1) + timedelta(hours=n),
            "category": "technology",
            "source": "example",
            "original_url": f"https://example.com/{n}",
        }
        fields.update(overrides)
        article = EnrichedArticle(**fields)
        test_db.add(article)
        test_db.commit()
        test_db.refresh(article)
        return article

    return _make


@pytest.fixture
def news_entry():
    def _make(article_id="a1", title="A headline about science", **overrides):
        entry = {
            "article_id": article_id,
            "title": title,
            "description": "Short teaser.",
            "content": "Scientists announced a discovery today. " * 10,
            "image_url": "https://img.example.com/1.jpg",
            "category": ["science"],
            "source_id": "example_news",
            "link": f"https://example.com/{article_id}",
            "pubDate": "2026-01-18 10:00:00",
        }
        entry.update(overrides)
        return entry

    return _make


@pytest.fixture
def app(test_db, test_settings):
    from easyread.main import create_application
    from easyread.core.database import get_db
    from easyread.config import get_settings

    application = create_application(test_settings)

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_settings] = lambda: test_settings
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def async_client(app):
    # Unhandled errors should come back as 500 responses, not be re-raised into the test
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
