from sqlalchemy import BigInteger, Column, ForeignKey, Index, Sequence, Table, Text, func, text
from sqlalchemy.dialects.postgresql import ARRAY, UUID as PG_UUID
from sqlalchemy.orm import declarative_base

Base = declarative_base()

SUBMISSION_NUMBER_SEQUENCE = "submissions_number_seq"
PARTICIPANT_EMAIL_INDEX = "participants_email_lower_key"

# Display numbers survive deletes; only an explicit reset rewinds them.
submission_number_seq = Sequence(SUBMISSION_NUMBER_SEQUENCE, start=1, metadata=Base.metadata)

# Submission <-> Participants (team membership)
submission_participants = Table(
    "submission_participants",
    Base.metadata,
    Column("participant_id", PG_UUID(as_uuid=True), ForeignKey("participants.id", ondelete="CASCADE"), primary_key=True),
    Column("submission_id", PG_UUID(as_uuid=True), ForeignKey("submissions.id", ondelete="CASCADE"), primary_key=True),
)


class ParticipantTable(Base):
    __tablename__ = "participants"
    id = Column(PG_UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    email = Column(Text, nullable=False)
    first_name = Column(Text)
    last_name = Column(Text)


# one participant per email regardless of case, including rows added by hand
Index(PARTICIPANT_EMAIL_INDEX, func.lower(ParticipantTable.email), unique=True)


class SubmissionTable(Base):
    __tablename__ = "submissions"
    id = Column(PG_UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    number = Column(
        BigInteger,
        submission_number_seq,
        server_default=submission_number_seq.next_value(),
        unique=True,
        nullable=False,
    )
    devpost_url = Column(Text, unique=True, nullable=False)
    title = Column(Text)
    repo_url = Column(Text)
    demo_url = Column(Text)
    video_url = Column(Text)
    prizes = Column(ARRAY(Text), nullable=False, server_default=text("ARRAY['GENERAL']::text[]"))


class ProfileTable(Base):
    __tablename__ = "profiles"
    # same id as the auth user
    id = Column(PG_UUID(as_uuid=True), primary_key=True)
    role = Column(Text)
