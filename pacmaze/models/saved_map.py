import datetime

from pacmaze import db
from pacmaze.maze import WallData

DIFFICULTIES = ("Easy", "Normal", "Hard")


class SavedMap(db.Model):
    """A maze layout saved from the editor, walls flattened row-major."""

    __tablename__ = 'saved_maps'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(32), unique=True, nullable=False)
    difficulty = db.Column(db.String(16), nullable=False, default='Normal')
    event_enabled = db.Column(db.Boolean, nullable=False, default=False)
    # Null when the walls were drawn by hand rather than generated
    seed = db.Column(db.BigInteger, nullable=True)
    horizontal_walls = db.Column(db.JSON, nullable=False)
    vertical_walls = db.Column(db.JSON, nullable=False)
    high_score = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    @property
    def wall_data(self) -> WallData:
        return WallData.from_flat(self.horizontal_walls, self.vertical_walls)

    @wall_data.setter
    def wall_data(self, walls: WallData) -> None:
        self.horizontal_walls, self.vertical_walls = walls.flatten()

    def summary(self):
        return {
            'id': self.id,
            'name': self.name,
            'difficulty': self.difficulty,
            'event_enabled': self.event_enabled,
            'seed': self.seed,
            'high_score': self.high_score,
        }

    def to_dict(self):
        data = self.summary()
        data['walls'] = self.wall_data.to_dict()
        data['created_at'] = self.created_at.isoformat() if self.created_at else None
        return data

    def __repr__(self):
        return f'<SavedMap {self.id} name={self.name!r} seed={self.seed}>'
