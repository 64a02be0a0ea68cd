from sqlalchemy import Column, Integer, String, Enum
from sqlalchemy.orm import relationship
import enum
from portal.db.base import Base

class Department(enum.Enum):
    HR = "HR"
    IT = "IT"
    FINANCE = "FINANCE"
    MARKETING = "MARKETING"

class Admin(Base):
    __tablename__ = "admins"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    hashed_password = Column(String, nullable=False)
    department = Column(Enum(Department), nullable=False)

    assignments = relationship("Assignment", back_populates="admin", order_by="Assignment.id")
