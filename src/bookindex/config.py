"""Configuration management for the book index builder."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Filler page
    filler_blank_lines: int = Field(default=15, ge=0)
    filler_text: str = "BLANK"
    filler_font_name: str = "Arial"
    filler_font_size_pt: float = Field(default=36, gt=0)

    # Entry formatting
    entry_font_name: str = "Times New Roman"
    entry_font_size_pt: float = Field(default=10, gt=0)

    # Page geometry (points, US Letter by default)
    page_width_pt: float = Field(default=612, gt=0)
    page_height_pt: float = Field(default=792, gt=0)
    margin_top_pt: float = Field(default=36, ge=0)
    margin_bottom_pt: float = Field(default=36, ge=0)
    margin_left_pt: float = Field(default=36, ge=0)
    margin_right_pt: float = Field(default=36, ge=0)

    # Columns
    columns: int = Field(default=2, ge=1)
    column_gap_pt: float = Field(default=18, ge=0)
    line_spacing: float = Field(default=1.15, gt=0)

    # Logging
    log_level: str = "INFO"

    @property
    def content_width(self) -> float:
        """Width available between the left and right margins."""
        return self.page_width_pt - self.margin_left_pt - self.margin_right_pt

    @property
    def column_width(self) -> float:
        """Width of a single text column."""
        gaps = self.column_gap_pt * (self.columns - 1)
        return (self.content_width - gaps) / self.columns

    class Config:
        env_prefix = "BOOKINDEX_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
