from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Models are imported in app.db.models so that Base.metadata sees both tables
# before init_db() or Alembic runs
