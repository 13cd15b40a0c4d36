"""create initial schema

Revision ID: 3c1e0a7d52b4
Revises:
Create Date: 2026-09-02 10:14:37

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1e0a7d52b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


USER_ROLE = sa.Enum('GUEST', 'MEMBER', 'ADMIN', 'SUPERADMIN', 'DELETED', name='user_role')
ADMIN_ACTION = sa.Enum(
    'APPROVE_USER', 'REJECT_USER', 'DELETE_USER', 'SET_ROLE', 'LINK_MEMBRE',
    'CREATE_ROLE', 'SAVE_PERMISSIONS', 'ASSIGN_ROLE', 'REVOKE_ROLE',
    'RESTORE_BACKUP', 'APPROVE_ADHESION',
    name='admin_action',
)


def _timestamps(updated: bool = False) -> list:
    cols = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)]
    if updated:
        cols.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False))
    return cols


def upgrade() -> None:
    # --- 회원 / 계정 ---
    op.create_table(
        'membres',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nom', sa.String(length=50), nullable=False),
        sa.Column('prenom', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('telephone', sa.String(length=30), nullable=True),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('date_inscription', sa.Date(), nullable=False),
        sa.Column('fonction', sa.String(length=100), nullable=True),
        sa.Column('est_membre_e2d', sa.Boolean(), nullable=False),
        sa.Column('est_adherent_phoenix', sa.Boolean(), nullable=False),
        sa.Column('equipe_e2d', sa.String(length=50), nullable=True),
        sa.Column('equipe_phoenix', sa.String(length=50), nullable=True),
        *_timestamps(updated=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_membres_nom', 'membres', ['nom'])
    op.create_index('ix_membres_statut', 'membres', ['statut'])

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('role', USER_ROLE, nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('refresh_token_version', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(updated=True),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('membre_id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_is_deleted', 'users', ['is_deleted'])

    op.create_table(
        'admin_action_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('actor_id', sa.Uuid(), nullable=False),
        sa.Column('target_user_id', sa.Uuid(), nullable=True),
        sa.Column('action', ADMIN_ACTION, nullable=False),
        sa.Column('before_role', sa.String(length=20), nullable=True),
        sa.Column('after_role', sa.String(length=20), nullable=True),
        sa.Column('details', sa.String(length=500), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id']),
        sa.ForeignKeyConstraint(['target_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'connexion_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_connexion_logs_created_at', 'connexion_logs', ['created_at'])

    # --- 권한 ---
    op.create_table(
        'roles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'role_permissions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('role_id', sa.Uuid(), nullable=False),
        sa.Column('resource', sa.String(length=50), nullable=False),
        sa.Column('permission', sa.String(length=20), nullable=False),
        sa.Column('granted', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('role_id', 'resource', 'permission', name='uq_role_permissions_role_resource_permission'),
    )

    op.create_table(
        'user_roles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('role_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'role_id', name='uq_user_roles_user_role'),
    )

    # --- 회계연도 / 회의 ---
    op.create_table(
        'exercices',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nom', sa.String(length=100), nullable=False),
        sa.Column('date_debut', sa.Date(), nullable=False),
        sa.Column('date_fin', sa.Date(), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'reunions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date_reunion', sa.Date(), nullable=False),
        sa.Column('type_reunion', sa.String(length=30), nullable=False),
        sa.Column('sujet', sa.String(length=255), nullable=True),
        sa.Column('ordre_du_jour', sa.String(length=2000), nullable=True),
        sa.Column('lieu_membre_id', sa.Uuid(), nullable=True),
        sa.Column('lieu_description', sa.String(length=255), nullable=True),
        sa.Column('statut', sa.String(length=20), nullable=False),
        *_timestamps(updated=True),
        sa.ForeignKeyConstraint(['lieu_membre_id'], ['membres.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reunions_date_reunion', 'reunions', ['date_reunion'])

    op.create_table(
        'reunions_presences',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('reunion_id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('present', sa.Boolean(), nullable=False),
        sa.Column('heure_arrivee', sa.String(length=10), nullable=True),
        sa.Column('observations', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['reunion_id'], ['reunions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('reunion_id', 'membre_id', name='uq_reunions_presences_reunion_membre'),
    )

    op.create_table(
        'rapports_seances',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('reunion_id', sa.Uuid(), nullable=False),
        sa.Column('sujet', sa.String(length=255), nullable=False),
        sa.Column('resolution', sa.String(length=2000), nullable=True),
        sa.Column('ordre', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['reunion_id'], ['reunions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'beneficiaires_config',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('mode_calcul', sa.String(length=20), nullable=False),
        sa.Column('pourcentage', sa.Float(), nullable=False),
        sa.Column('montant_fixe', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'reunion_beneficiaires',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('reunion_id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('montant', sa.Integer(), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('date_paiement', sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['reunion_id'], ['reunions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('reunion_id', 'membre_id', name='uq_reunion_beneficiaires_reunion_membre'),
    )

    # --- 회비 ---
    op.create_table(
        'cotisations_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nom', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('montant_defaut', sa.Integer(), nullable=True),
        sa.Column('obligatoire', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('nom'),
    )

    op.create_table(
        'membres_cotisations_config',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('type_cotisation_id', sa.Uuid(), nullable=False),
        sa.Column('montant_personnalise', sa.Integer(), nullable=False),
        *_timestamps(updated=True),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['type_cotisation_id'], ['cotisations_types.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('membre_id', 'type_cotisation_id', name='uq_membres_cotisations_config_membre_type'),
    )

    op.create_table(
        'cotisations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('type_cotisation_id', sa.Uuid(), nullable=False),
        sa.Column('montant', sa.Integer(), nullable=False),
        sa.Column('date_paiement', sa.Date(), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('reunion_id', sa.Uuid(), nullable=True),
        sa.Column('exercice_id', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id']),
        sa.ForeignKeyConstraint(['type_cotisation_id'], ['cotisations_types.id']),
        sa.ForeignKeyConstraint(['reunion_id'], ['reunions.id']),
        sa.ForeignKeyConstraint(['exercice_id'], ['exercices.id']),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cotisations_membre_id', 'cotisations', ['membre_id'])
    op.create_index('ix_cotisations_type_cotisation_id', 'cotisations', ['type_cotisation_id'])
    op.create_index('ix_cotisations_date_paiement', 'cotisations', ['date_paiement'])

    # --- 저축 / 대출 ---
    op.create_table(
        'epargnes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('montant', sa.Integer(), nullable=False),
        sa.Column('date_depot', sa.Date(), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('exercice_id', sa.Uuid(), nullable=True),
        sa.Column('reunion_id', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.String(length=500), nullable=True),
        *_timestamps(updated=True),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id']),
        sa.ForeignKeyConstraint(['exercice_id'], ['exercices.id']),
        sa.ForeignKeyConstraint(['reunion_id'], ['reunions.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_epargnes_membre_id', 'epargnes', ['membre_id'])

    op.create_table(
        'prets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('avaliste_id', sa.Uuid(), nullable=True),
        sa.Column('montant', sa.Integer(), nullable=False),
        sa.Column('taux_interet', sa.Float(), nullable=False),
        sa.Column('date_pret', sa.Date(), nullable=False),
        sa.Column('echeance', sa.Date(), nullable=False),
        sa.Column('reconductions', sa.Integer(), nullable=False),
        sa.Column('montant_paye', sa.Integer(), nullable=False),
        sa.Column('montant_total_du', sa.Integer(), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.String(length=1000), nullable=True),
        *_timestamps(updated=True),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id']),
        sa.ForeignKeyConstraint(['avaliste_id'], ['membres.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_prets_membre_id', 'prets', ['membre_id'])

    op.create_table(
        'prets_paiements',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('pret_id', sa.Uuid(), nullable=False),
        sa.Column('montant_paye', sa.Integer(), nullable=False),
        sa.Column('date_paiement', sa.Date(), nullable=False),
        sa.Column('mode_paiement', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['pret_id'], ['prets.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_prets_paiements_pret_id', 'prets_paiements', ['pret_id'])

    # --- 스포츠 ---
    op.create_table(
        'matchs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('equipe', sa.String(length=10), nullable=False),
        sa.Column('date_match', sa.Date(), nullable=False),
        sa.Column('heure_match', sa.String(length=10), nullable=True),
        sa.Column('equipe_adverse', sa.String(length=100), nullable=False),
        sa.Column('lieu', sa.String(length=255), nullable=True),
        sa.Column('type_match', sa.String(length=20), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('score_equipe', sa.Integer(), nullable=True),
        sa.Column('score_adverse', sa.Integer(), nullable=True),
        sa.Column('notes', sa.String(length=1000), nullable=True),
        *_timestamps(updated=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_matchs_equipe', 'matchs', ['equipe'])

    op.create_table(
        'match_statistics',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('match_id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=True),
        sa.Column('player_name', sa.String(length=100), nullable=False),
        sa.Column('goals', sa.Integer(), nullable=False),
        sa.Column('assists', sa.Integer(), nullable=False),
        sa.Column('yellow_cards', sa.Integer(), nullable=False),
        sa.Column('red_cards', sa.Integer(), nullable=False),
        sa.Column('man_of_match', sa.Boolean(), nullable=False),
        sa.Column('cards_synced', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['match_id'], ['matchs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_match_statistics_match_id', 'match_statistics', ['match_id'])
    op.create_index('ix_match_statistics_membre_id', 'match_statistics', ['membre_id'])

    op.create_table(
        'match_presences',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('match_id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('present', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['match_id'], ['matchs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('match_id', 'membre_id', name='uq_match_presences_match_membre'),
    )

    op.create_table(
        'phoenix_adherents',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('date_adhesion', sa.Date(), nullable=False),
        sa.Column('montant_adhesion', sa.Integer(), nullable=False),
        sa.Column('adhesion_payee', sa.Boolean(), nullable=False),
        sa.Column('date_limite_paiement', sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('membre_id'),
    )

    op.create_table(
        'phoenix_entrainements',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date_entrainement', sa.Date(), nullable=False),
        sa.Column('heure_debut', sa.String(length=10), nullable=True),
        sa.Column('heure_fin', sa.String(length=10), nullable=True),
        sa.Column('lieu', sa.String(length=255), nullable=True),
        sa.Column('type_entrainement', sa.String(length=20), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('score_jaune', sa.Integer(), nullable=True),
        sa.Column('score_rouge', sa.Integer(), nullable=True),
        sa.Column('equipe_gagnante', sa.String(length=10), nullable=True),
        sa.Column('notes', sa.String(length=1000), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_phoenix_entrainements_date_entrainement', 'phoenix_entrainements', ['date_entrainement'])

    op.create_table(
        'phoenix_presences_entrainement',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('entrainement_id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('present', sa.Boolean(), nullable=False),
        sa.Column('retard_minutes', sa.Integer(), nullable=False),
        sa.Column('excuse', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['entrainement_id'], ['phoenix_entrainements.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('entrainement_id', 'membre_id', name='uq_phoenix_presences_entrainement_membre'),
    )
    op.create_index(
        'ix_phoenix_presences_entrainement_entrainement_id', 'phoenix_presences_entrainement', ['entrainement_id']
    )

    op.create_table(
        'phoenix_compositions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('match_id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('equipe_nom', sa.String(length=10), nullable=False),
        sa.Column('poste', sa.String(length=50), nullable=True),
        sa.Column('est_capitaine', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['match_id'], ['matchs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('match_id', 'membre_id', name='uq_phoenix_compositions_match_membre'),
    )
    op.create_index('ix_phoenix_compositions_match_id', 'phoenix_compositions', ['match_id'])

    op.create_table(
        'sport_finances',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('equipe', sa.String(length=10), nullable=False),
        sa.Column('type_operation', sa.String(length=10), nullable=False),
        sa.Column('montant', sa.Integer(), nullable=False),
        sa.Column('libelle', sa.String(length=255), nullable=False),
        sa.Column('date_operation', sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sport_finances_equipe', 'sport_finances', ['equipe'])

    # --- 제재 ---
    op.create_table(
        'sanctions_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nom', sa.String(length=100), nullable=False),
        sa.Column('montant', sa.Integer(), nullable=False),
        sa.Column('categorie', sa.String(length=50), nullable=True),
        sa.Column('contexte', sa.String(length=20), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('nom', 'contexte', name='uq_sanctions_types_nom_contexte'),
    )

    op.create_table(
        'sanctions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=False),
        sa.Column('type_sanction_id', sa.Uuid(), nullable=False),
        sa.Column('montant', sa.Integer(), nullable=False),
        sa.Column('montant_paye', sa.Integer(), nullable=False),
        sa.Column('date_sanction', sa.Date(), nullable=False),
        sa.Column('motif', sa.String(length=1000), nullable=True),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('contexte_sanction', sa.String(length=20), nullable=False),
        sa.Column('reunion_id', sa.Uuid(), nullable=True),
        sa.Column('source_statistic_id', sa.Uuid(), nullable=True),
        *_timestamps(updated=True),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id']),
        sa.ForeignKeyConstraint(['type_sanction_id'], ['sanctions_types.id']),
        sa.ForeignKeyConstraint(['reunion_id'], ['reunions.id']),
        sa.ForeignKeyConstraint(['source_statistic_id'], ['match_statistics.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sanctions_membre_id', 'sanctions', ['membre_id'])
    op.create_index('ix_sanctions_statut', 'sanctions', ['statut'])

    # --- 지원금 ---
    op.create_table(
        'aides_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nom', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('montant_defaut', sa.Integer(), nullable=True),
        sa.Column('mode_repartition', sa.String(length=20), nullable=False),
        sa.Column('delai_remboursement', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('nom'),
    )

    op.create_table(
        'aides',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('beneficiaire_id', sa.Uuid(), nullable=False),
        sa.Column('type_aide_id', sa.Uuid(), nullable=False),
        sa.Column('montant', sa.Integer(), nullable=False),
        sa.Column('date_allocation', sa.Date(), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('contexte_aide', sa.String(length=20), nullable=False),
        sa.Column('justificatif', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('reunion_id', sa.Uuid(), nullable=True),
        sa.Column('exercice_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['beneficiaire_id'], ['membres.id']),
        sa.ForeignKeyConstraint(['type_aide_id'], ['aides_types.id']),
        sa.ForeignKeyConstraint(['reunion_id'], ['reunions.id']),
        sa.ForeignKeyConstraint(['exercice_id'], ['exercices.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_aides_beneficiaire_id', 'aides', ['beneficiaire_id'])

    # --- 현금 출납 ---
    op.create_table(
        'fond_caisse_clotures',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date_cloture', sa.Date(), nullable=False),
        sa.Column('solde_ouverture', sa.Integer(), nullable=False),
        sa.Column('total_entrees', sa.Integer(), nullable=False),
        sa.Column('total_sorties', sa.Integer(), nullable=False),
        sa.Column('solde_theorique', sa.Integer(), nullable=False),
        sa.Column('solde_reel', sa.Integer(), nullable=False),
        sa.Column('ecart', sa.Integer(), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('cloture_par', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['cloture_par'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'fond_caisse_operations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('type_operation', sa.String(length=10), nullable=False),
        sa.Column('montant', sa.Integer(), nullable=False),
        sa.Column('libelle', sa.String(length=255), nullable=False),
        sa.Column('date_operation', sa.Date(), nullable=False),
        sa.Column('categorie', sa.String(length=50), nullable=True),
        sa.Column('operateur_id', sa.Uuid(), nullable=True),
        sa.Column('cloture_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['operateur_id'], ['users.id']),
        sa.ForeignKeyConstraint(['cloture_id'], ['fond_caisse_clotures.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_fond_caisse_operations_cloture_id', 'fond_caisse_operations', ['cloture_id'])

    # --- 공개 페이지 ---
    op.create_table(
        'adhesions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nom', sa.String(length=50), nullable=False),
        sa.Column('prenom', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('telephone', sa.String(length=30), nullable=False),
        sa.Column('message', sa.String(length=1000), nullable=True),
        sa.Column('type_adhesion', sa.String(length=10), nullable=False),
        sa.Column('montant_paye', sa.Integer(), nullable=False),
        sa.Column('payment_method', sa.String(length=30), nullable=True),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        sa.Column('membre_id', sa.Uuid(), nullable=True),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['membre_id'], ['membres.id']),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'donations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('donor_name', sa.String(length=100), nullable=False),
        sa.Column('donor_email', sa.String(length=255), nullable=False),
        sa.Column('donor_phone', sa.String(length=30), nullable=True),
        sa.Column('donor_message', sa.String(length=1000), nullable=True),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('payment_method', sa.String(length=30), nullable=True),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('recurring', sa.String(length=10), nullable=False),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'messages_contact',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nom', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('objet', sa.String(length=255), nullable=True),
        sa.Column('message', sa.String(length=2000), nullable=False),
        sa.Column('statut', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    for table in (
        'messages_contact', 'donations', 'adhesions',
        'fond_caisse_operations', 'fond_caisse_clotures',
        'aides', 'aides_types',
        'sanctions', 'sanctions_types',
        'sport_finances', 'phoenix_compositions', 'phoenix_presences_entrainement', 'phoenix_entrainements',
        'phoenix_adherents', 'match_presences', 'match_statistics', 'matchs',
        'prets_paiements', 'prets', 'epargnes',
        'cotisations', 'membres_cotisations_config', 'cotisations_types',
        'reunion_beneficiaires', 'beneficiaires_config', 'rapports_seances', 'reunions_presences', 'reunions',
        'exercices',
        'user_roles', 'role_permissions', 'roles',
        'connexion_logs', 'admin_action_logs', 'users', 'membres',
    ):
        op.drop_table(table)

    ADMIN_ACTION.drop(op.get_bind(), checkfirst=True)
    USER_ROLE.drop(op.get_bind(), checkfirst=True)
