from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from portal.db.base import Base

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    hashed_password = Column(String, nullable=False)

    submissions = relationship("AssignmentSubmission", back_populates="user")
