import enum

from models.db import db, utcnow


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    password_digest = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(100), unique=True, nullable=False)
    role = db.Column(db.String(10), nullable=False, default=UserRole.USER.value)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    bookings = db.relationship("Booking", back_populates="user", passive_deletes=True)

    __table_args__ = (
        db.CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    def public_view(self) -> dict:
        """The projection that is safe to hand to clients (no digest)."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
        }
