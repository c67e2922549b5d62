"""Database models for Keyword Scout."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

TrendStatus = Literal["rising", "stable", "declining", "peak", "seasonal"]
RelationshipType = Literal["cross_appeal", "trend_combo", "seasonal_combo"]


# ============================================================================
# Pydantic Models (for data transfer)
# ============================================================================


class KeywordInput(BaseModel):
    """Raw keyword record as supplied to the importer."""

    keyword: str
    search_volume: int
    competition_index: int
    category: str
    trend_status: Optional[TrendStatus] = None


class KeywordRecord(BaseModel):
    """Read-only keyword snapshot handed to the scoring engine."""

    id: int
    keyword: str
    search_volume: int
    competition_index: int
    category: str
    trend_status: TrendStatus = "stable"

    model_config = {"frozen": True, "from_attributes": True}


class MetricsSnapshot(BaseModel):
    """Most recent engagement metrics recorded for a keyword."""

    click_volume: int = 0
    conversion_potential: float = 0
    niche_saturation: float = 0
    commercial_intent: float = 0
    recorded_at: Optional[datetime] = None

    model_config = {"frozen": True, "from_attributes": True}


class TrendSnapshot(BaseModel):
    """Most recent trend analysis recorded for a keyword."""

    velocity_score: float = 0
    seasonality_pattern: str = "stable"
    peak_month: Optional[int] = None
    growth_7d: float = 0
    growth_30d: float = 0
    analyzed_at: Optional[datetime] = None

    model_config = {"frozen": True, "from_attributes": True}


# ============================================================================
# SQLAlchemy Models (for database)
# ============================================================================


class Keyword(Base):
    """Master keyword table - one row per normalized keyword text."""

    __tablename__ = "keywords"

    id = Column(Integer, primary_key=True)
    keyword = Column(String, unique=True, index=True, nullable=False)
    search_volume = Column(Integer, default=0, index=True, nullable=False)
    competition_index = Column(Integer, default=0, nullable=False)
    category = Column(String, index=True, nullable=False)
    trend_status = Column(String, default="stable", index=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    metrics = relationship("KeywordMetrics", back_populates="keyword")
    trend_analyses = relationship("TrendAnalysis", back_populates="keyword")

    def __repr__(self):
        return f"<Keyword(id={self.id}, keyword='{self.keyword}', volume={self.search_volume})>"


class KeywordMetrics(Base):
    """Time-series engagement metrics for a keyword."""

    __tablename__ = "keyword_metrics"
    __table_args__ = (
        CheckConstraint(
            "conversion_potential BETWEEN 0 AND 100", name="ck_keyword_metrics_conversion"
        ),
        CheckConstraint(
            "niche_saturation BETWEEN 0 AND 100", name="ck_keyword_metrics_saturation"
        ),
        CheckConstraint(
            "commercial_intent BETWEEN 0 AND 100", name="ck_keyword_metrics_intent"
        ),
    )

    id = Column(Integer, primary_key=True)
    keyword_id = Column(Integer, ForeignKey("keywords.id"), index=True, nullable=False)

    click_volume = Column(Integer, default=0)
    conversion_potential = Column(Float, default=0.0)
    niche_saturation = Column(Float, default=0.0)
    commercial_intent = Column(Float, default=0.0)

    recorded_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    keyword = relationship("Keyword", back_populates="metrics")

    def __repr__(self):
        return f"<KeywordMetrics(id={self.id}, keyword_id={self.keyword_id})>"


class TrendAnalysis(Base):
    """Time-series trend analysis for a keyword."""

    __tablename__ = "trend_analysis"
    __table_args__ = (
        CheckConstraint(
            "velocity_score BETWEEN -100 AND 100", name="ck_trend_analysis_velocity"
        ),
        CheckConstraint("peak_month BETWEEN 1 AND 12", name="ck_trend_analysis_peak_month"),
    )

    id = Column(Integer, primary_key=True)
    keyword_id = Column(Integer, ForeignKey("keywords.id"), index=True, nullable=False)

    velocity_score = Column(Float, default=0.0)
    seasonality_pattern = Column(String, default="stable")
    peak_month = Column(Integer)  # 1-12, nullable
    growth_7d = Column(Float, default=0.0)
    growth_30d = Column(Float, default=0.0)

    analyzed_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    keyword = relationship("Keyword", back_populates="trend_analyses")

    def __repr__(self):
        return f"<TrendAnalysis(id={self.id}, keyword_id={self.keyword_id}, velocity={self.velocity_score})>"


class KeywordRelationship(Base):
    """Directed affinity edge between two keywords."""

    __tablename__ = "keyword_relationships"
    __table_args__ = (UniqueConstraint("keyword_id", "related_keyword_id"),)

    id = Column(Integer, primary_key=True)
    keyword_id = Column(Integer, ForeignKey("keywords.id"), index=True, nullable=False)
    related_keyword_id = Column(Integer, ForeignKey("keywords.id"), nullable=False)

    correlation_strength = Column(Integer, default=0)
    relationship_type = Column(String, nullable=False)  # cross_appeal, trend_combo, seasonal_combo

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return (
            f"<KeywordRelationship({self.keyword_id} -> {self.related_keyword_id}, "
            f"type='{self.relationship_type}')>"
        )


class NicheCategory(Base):
    """Category bookkeeping for keyword niches."""

    __tablename__ = "niche_categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text)
    trending_keywords_count = Column(Integer, default=0)
    average_opportunity_score = Column(Float, default=0.0)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<NicheCategory(id={self.id}, name='{self.name}')>"
