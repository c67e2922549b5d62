"""Database operations and management"""

from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
import logging

from ..errors import InvalidInputError, RepositoryError
from .models import (
    Base,
    Keyword,
    KeywordMetrics,
    KeywordRecord,
    KeywordRelationship,
    MetricsSnapshot,
    NicheCategory,
    TrendAnalysis,
    TrendSnapshot,
)

logger = logging.getLogger(__name__)


def sqlite_directory(db_url: str) -> Optional[Path]:
    """Directory holding a file-backed SQLite database, None for anything else"""
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return None
    return Path(url.database).parent


class Database:
    """SQLAlchemy-backed keyword repository"""

    def __init__(self, db_url: str = "sqlite:///data/db/keywords.db", echo: bool = False):
        self.db_url = db_url
        connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
        try:
            self.engine = create_engine(db_url, echo=echo, connect_args=connect_args)
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to initialize database {db_url}: {e}") from e
        self.Session = sessionmaker(bind=self.engine)
        logger.info(f"Database initialized: {db_url}")

    @contextmanager
    def session(self):
        """Context manager for database sessions"""
        session = self.Session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database session error: {e}")
            raise RepositoryError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_keywords(
        self,
        min_volume: Optional[int] = None,
        max_competition: Optional[int] = None,
        category: Optional[str] = None,
        trend_status: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[KeywordRecord]:
        """List keywords matching the filters, highest search volume first"""
        with self.session() as session:
            query = session.query(Keyword)

            if min_volume is not None:
                query = query.filter(Keyword.search_volume >= min_volume)
            if max_competition is not None:
                query = query.filter(Keyword.competition_index <= max_competition)
            if category:
                query = query.filter(Keyword.category == category)
            if trend_status:
                query = query.filter(Keyword.trend_status == trend_status)

            query = query.order_by(Keyword.search_volume.desc(), Keyword.id.asc())

            if limit is not None:
                query = query.limit(limit)

            return [KeywordRecord.model_validate(k) for k in query.all()]

    def latest_metrics(self, keyword_id: int) -> Optional[MetricsSnapshot]:
        """Get the most recently recorded metrics for a keyword"""
        with self.session() as session:
            metrics = (
                session.query(KeywordMetrics)
                .filter(KeywordMetrics.keyword_id == keyword_id)
                .order_by(KeywordMetrics.recorded_at.desc(), KeywordMetrics.id.desc())
                .first()
            )
            return MetricsSnapshot.model_validate(metrics) if metrics else None

    def latest_trend(self, keyword_id: int) -> Optional[TrendSnapshot]:
        """Get the most recent trend analysis for a keyword"""
        with self.session() as session:
            trend = (
                session.query(TrendAnalysis)
                .filter(TrendAnalysis.keyword_id == keyword_id)
                .order_by(TrendAnalysis.analyzed_at.desc(), TrendAnalysis.id.desc())
                .first()
            )
            return TrendSnapshot.model_validate(trend) if trend else None

    def competition_indices(self, category: str) -> list[int]:
        """Get every competition index recorded in a category"""
        with self.session() as session:
            rows = (
                session.query(Keyword.competition_index)
                .filter(Keyword.category == category)
                .all()
            )
            return [row[0] for row in rows]

    def trend_peaks_for_category(self, category: str) -> list[Optional[int]]:
        """Get the peak month of every trend analysis in a category"""
        with self.session() as session:
            rows = (
                session.query(TrendAnalysis.peak_month)
                .join(Keyword, TrendAnalysis.keyword_id == Keyword.id)
                .filter(Keyword.category == category)
                .all()
            )
            return [row[0] for row in rows]

    def related_keywords(self, keyword_id: int) -> list[KeywordRecord]:
        """Get keywords reached by outgoing relationship edges"""
        with self.session() as session:
            keywords = (
                session.query(Keyword)
                .join(KeywordRelationship, KeywordRelationship.related_keyword_id == Keyword.id)
                .filter(KeywordRelationship.keyword_id == keyword_id)
                .order_by(KeywordRelationship.correlation_strength.desc(), Keyword.id.asc())
                .all()
            )
            return [KeywordRecord.model_validate(k) for k in keywords]

    def search_keyword(self, text: str) -> Optional[KeywordRecord]:
        """Find the first keyword containing the text (case-insensitive)"""
        with self.session() as session:
            keyword = (
                session.query(Keyword)
                .filter(Keyword.keyword.ilike(f"%{text}%"))
                .order_by(Keyword.id.asc())
                .first()
            )
            return KeywordRecord.model_validate(keyword) if keyword else None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def upsert_keywords(self, records: list[dict]) -> list[KeywordRecord]:
        """Insert or update keywords, matching on keyword text"""
        with self.session() as session:
            stored = []
            for record in records:
                keyword = (
                    session.query(Keyword)
                    .filter(Keyword.keyword == record["keyword"])
                    .first()
                )

                if keyword:
                    keyword.search_volume = record["search_volume"]
                    keyword.competition_index = record["competition_index"]
                    keyword.category = record["category"]
                    keyword.trend_status = record["trend_status"]
                    keyword.updated_at = datetime.utcnow()
                else:
                    keyword = Keyword(**record)
                    session.add(keyword)

                session.flush()  # Get the ID
                stored.append(KeywordRecord.model_validate(keyword))

            logger.debug(f"Upserted {len(stored)} keywords")
            return stored

    def add_metrics(self, keyword_id: int, metrics: dict) -> MetricsSnapshot:
        """Record a metrics snapshot for a keyword"""
        with self.session() as session:
            row = KeywordMetrics(keyword_id=keyword_id, **metrics)
            session.add(row)
            session.flush()
            return MetricsSnapshot.model_validate(row)

    def add_trend_analysis(self, keyword_id: int, analysis: dict) -> TrendSnapshot:
        """Record a trend analysis snapshot for a keyword"""
        with self.session() as session:
            row = TrendAnalysis(keyword_id=keyword_id, **analysis)
            session.add(row)
            session.flush()
            return TrendSnapshot.model_validate(row)

    def upsert_niche(self, name: str, description: Optional[str] = None) -> NicheCategory:
        """Create a niche category or update its description"""
        with self.session() as session:
            niche = session.query(NicheCategory).filter(NicheCategory.name == name).first()

            if niche:
                niche.description = description
            else:
                niche = NicheCategory(name=name, description=description)
                session.add(niche)

            session.flush()
            session.expunge(niche)
            return niche

    def add_relationship(
        self,
        keyword_id: int,
        related_keyword_id: int,
        correlation_strength: int,
        relationship_type: str,
    ) -> bool:
        """Add a directed relationship edge.

        Returns False when the edge already exists.
        """
        if keyword_id == related_keyword_id:
            raise InvalidInputError("A keyword cannot be related to itself")

        with self.session() as session:
            existing = (
                session.query(KeywordRelationship)
                .filter(
                    KeywordRelationship.keyword_id == keyword_id,
                    KeywordRelationship.related_keyword_id == related_keyword_id,
                )
                .first()
            )

            if existing:
                logger.debug(f"Relationship {keyword_id} -> {related_keyword_id} already exists")
                return False

            session.add(
                KeywordRelationship(
                    keyword_id=keyword_id,
                    related_keyword_id=related_keyword_id,
                    correlation_strength=correlation_strength,
                    relationship_type=relationship_type,
                )
            )
            return True

    def count_keywords(self) -> int:
        """Count total keywords"""
        with self.session() as session:
            return session.query(Keyword).count()
