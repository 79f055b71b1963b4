from sqlalchemy.orm import declarative_base

SQLAlchemyBase = declarative_base()
