from sqlalchemy.orm import declarative_base

Base = declarative_base()
import app.models.user
import app.models.teacher
import app.models.student
import app.models.school
import app.models.post
import app.models.like
import app.models.comment
import app.models.connection
import app.models.review
import app.models.message
import app.models.discussion
import app.models.discussion_comment
