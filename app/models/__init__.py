from app.models.user import User, Role  # noqa: F401
from app.models.admin_log import AdminActionLog, AdminAction, ConnexionLog  # noqa: F401
from app.models.permission import NamedRole, RolePermission, UserRole  # noqa: F401
from app.models.membre import Membre  # noqa: F401
from app.models.exercice import Exercice  # noqa: F401
from app.models.cotisation import CotisationType, MembreCotisationConfig, Cotisation  # noqa: F401
from app.models.epargne import Epargne  # noqa: F401
from app.models.pret import Pret, PretPaiement  # noqa: F401
from app.models.sport import (  # noqa: F401
    Match,
    MatchStatistic,
    MatchPresence,
    PhoenixAdherent,
    PhoenixEntrainement,
    PhoenixEntrainementPresence,
    PhoenixComposition,
    SportOperation,
)
from app.models.sanction import SanctionType, Sanction  # noqa: F401
from app.models.reunion import (  # noqa: F401
    Reunion,
    ReunionPresence,
    RapportSeance,
    BeneficiaireConfig,
    ReunionBeneficiaire,
)
from app.models.aide import AideType, Aide  # noqa: F401
from app.models.caisse import CaisseCloture, CaisseOperation  # noqa: F401
from app.models.vitrine import AdhesionRequest, Donation, ContactMessage  # noqa: F401
