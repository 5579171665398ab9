from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Integer, String, Numeric, Boolean, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from app.core.db import Base


class Banner(Base):
    __tablename__ = "banners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    title: Mapped[str] = mapped_column(String(160), default="")
    description: Mapped[str] = mapped_column(Text, default="")
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    image_url: Mapped[str] = mapped_column(Text, default="")
    gradient_color1: Mapped[str] = mapped_column(String(9), default="#ff6b35")
    gradient_color2: Mapped[str] = mapped_column(String(9), default="#f7931e")
    gradient_color3: Mapped[str] = mapped_column(String(9), default="#ffd23f")
    gradient_color4: Mapped[str] = mapped_column(String(9), default="#ff8c42")
    use_background_image: Mapped[bool] = mapped_column(Boolean, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
