from sqlalchemy import Column, Integer, String, Float, DateTime, func
from app.models import Base # Import Base from the common models file

class Club(Base):
    __tablename__ = "clubs"
    id = Column(Integer, primary_key=True)
    club_name = Column(String(255), nullable=False)
    website = Column(String(512), nullable=True)
    membership_contact_name = Column(String(255), nullable=True)
    membership_contact_phone = Column(String(50), nullable=True)
    street_number = Column(String(20), nullable=True)
    street_name = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    province = Column(String(50), nullable=True)
    postal = Column(String(20), nullable=True)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
