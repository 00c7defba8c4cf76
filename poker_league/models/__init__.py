from .tournament_model import TournamentModel, TournamentStatus, RosterEntry, ResultEntry
from .registration_model import RegistrationModel
from .user_model import UserModel, UserStats, HistoryEntry
from .document_model import DocumentModel
