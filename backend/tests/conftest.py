"""
Pytest configuration and shared fixtures for backend tests.
"""

import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from core.domain.content import Article, ImageBlock, SponsorshipBlock, TextBlock
from core.interfaces.services import TextGenerationService
from core.security import TokenService
from infrastructure.config import get_settings
from infrastructure.database.connection import get_db
from infrastructure.database.models import Base
from services.content_gateway import ArticleGateway
from services.content_library import ContentLibrary
from services.editor_session import EditorSessionRegistry

settings = get_settings()
token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
)


# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeTextGenerator(TextGenerationService):
    """Records prompts and answers with a fixed reply."""

    def __init__(self, reply: str = "<p>Generated prose.</p>"):
        self.reply = reply
        self.prompts: list[str] = []

    async def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def library(session_factory) -> ContentLibrary:
    """Content library bound to the test database."""
    lib = ContentLibrary(session_factory)
    await lib.refresh()
    return lib


@pytest.fixture
def editor_registry() -> EditorSessionRegistry:
    return EditorSessionRegistry()


@pytest.fixture
def text_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def sample_article() -> Article:
    """An article with one block of three different variants."""
    return Article(
        id="grind-article-1",
        title="The Quiet Return of the Pocket Watch",
        subtitle="Craft, patience and the mechanical heart",
        author="A. Vanderbilt",
        publish_date="October 12, 2023",
        hero_image="https://images.example.com/watch.jpg",
        content=(
            TextBlock(id="b1", content="<p>Time, kept by hand.</p>"),
            ImageBlock(id="b2", src="https://images.example.com/dial.jpg", caption="A guilloché dial"),
            SponsorshipBlock(id="b3", company="Maison Horlogère", logo_src="", link="https://example.com"),
        ),
    )


@pytest.fixture
async def stored_article(session_factory, library: ContentLibrary, sample_article: Article) -> Article:
    """``sample_article`` persisted and loaded into the library."""
    async with session_factory() as session:
        await ArticleGateway(session).insert(sample_article)
    await library.refresh()
    return library.get_article(sample_article.id)


@pytest.fixture
def auth_headers() -> dict:
    """Generate authentication headers for the admin."""
    access_token = token_service.create_access_token(subject=settings.admin_email, role="admin")
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
async def async_client(
    db_session: AsyncSession,
    library: ContentLibrary,
    editor_registry: EditorSessionRegistry,
    text_generator: FakeTextGenerator,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app
    from adapters.ai.anthropic_adapter import get_text_generation_service
    from services.content_library import get_content_library
    from services.editor_session import get_editor_sessions

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_content_library] = lambda: library
    app.dependency_overrides[get_editor_sessions] = lambda: editor_registry
    app.dependency_overrides[get_text_generation_service] = lambda: text_generator

    # Reset rate limiter state between tests to prevent cross-test 429s
    if hasattr(app.state, "limiter"):
        app.state.limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
