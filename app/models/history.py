"""
History entry model for completed generations.
"""
from sqlalchemy import Column, String, Text, DateTime, LargeBinary
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class HistoryEntry(Base):
    """
    A durably persisted generation.

    Attributes:
        id: Originating job id
        voice: Voice name
        model: Model id
        model_label: Model display label
        style_preset: Style tag the job was configured with
        style_label: Style display label
        custom_style: Free-text style directive
        text: Source text
        audio: Audio bytes (independent copy of the job artifact)
        mime_type: Audio container type
        created_at: When the entry was recorded
    """
    __tablename__ = 'generations'

    id = Column(String(36), primary_key=True)
    voice = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    model_label = Column(String(100), nullable=False, default='')
    style_preset = Column(Text, nullable=False, default='')
    style_label = Column(String(100), nullable=False, default='')
    custom_style = Column(Text, nullable=False, default='')
    text = Column(Text, nullable=False)
    audio = Column(LargeBinary, nullable=False)
    mime_type = Column(String(50), nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    @property
    def audio_size(self) -> int:
        return len(self.audio) if self.audio is not None else 0

    def __repr__(self):
        return f'<HistoryEntry {self.id} voice={self.voice} created_at={self.created_at}>'
