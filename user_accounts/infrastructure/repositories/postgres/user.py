"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Implementar el contrato UserRepository contra la tabla `users`.
  - Ejecutar SQL parametrizado (nunca interpolar input de usuario).
  - Mapear filas crudas -> entidad de dominio `User` y validar `UserRole`.
  - Traducir violaciones de unicidad (uq_users_username / uq_users_email)
    a UniqueConstraintError; el resto de fallos a DatabaseError.
  - Sellar created_at/updated_at en insert y avanzar updated_at en update.

Collaborators:
  - psycopg_pool.ConnectionPool (pool de conexiones)
  - infrastructure.db.pool.get_pool (accesor del pool global)
  - domain.entities.User / UserRole
  - crosscutting.logger.logger (logs)
  - crosscutting.exceptions.DatabaseError / UniqueConstraintError

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio.
  - Retorna None cuando no existe el recurso (no exception por “not found”).
  - Cada método usa una conexión del pool = una transacción: commit al salir,
    rollback si hubo excepción.
  - Orden estable en listados: id ASC.
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError, UniqueConstraintError
from ....crosscutting.logger import logger
from ....domain.entities import User, UserRole

# ============================================================
# Constantes y contratos de SQL
# ============================================================
# R: Lista explícita de columnas; el orden es el contrato de _row_to_user.
_USER_COLUMNS = (
    "id, username, email, password_hash, first_name, last_name, role, "
    "is_enabled, is_account_non_locked, is_account_non_expired, "
    "is_credentials_non_expired, created_at, updated_at, last_login"
)

_USER_ORDER_BY = "id ASC"

# R: constraint -> campo expuesto en el error de conflicto.
_UNIQUE_CONSTRAINT_FIELDS = {
    "uq_users_username": "username",
    "uq_users_email": "email",
}


def _row_to_user(row: tuple) -> User:
    """
    Convierte una fila de `users` a entidad de dominio `User`.

    Role casting estricto: si el valor no matchea el enum -> DatabaseError.
    """
    try:
        role = UserRole(row[6])
    except ValueError as exc:
        raise DatabaseError(f"Invalid user role in database: {row[6]}") from exc

    return User(
        id=row[0],
        username=row[1],
        email=row[2],
        password_hash=row[3],
        first_name=row[4],
        last_name=row[5],
        role=role,
        is_enabled=row[7],
        is_account_non_locked=row[8],
        is_account_non_expired=row[9],
        is_credentials_non_expired=row[10],
        created_at=row[11],
        updated_at=row[12],
        last_login=row[13],
    )


def _like_pattern(fragment: str) -> str:
    """Escapa comodines de LIKE y arma un patrón 'contiene'."""
    escaped = (
        fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


class PostgresUserRepository:
    """
    Repositorio de usuarios sobre PostgreSQL (psycopg 3).

    El pool es inyectable (tests); si es None se usa el pool global.
    """

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    # ============================================================
    # Helpers internos: pool + ejecución con errores consistentes
    # ============================================================
    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        log_msg: str,
        log_extra: dict[str, object],
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except pg_errors.UniqueViolation as exc:
            constraint = getattr(exc.diag, "constraint_name", None) or ""
            field = _UNIQUE_CONSTRAINT_FIELDS.get(constraint, "user")
            logger.info(
                "PostgresUserRepository: unique violation",
                extra={**log_extra, "constraint": constraint},
            )
            raise UniqueConstraintError(field, original_error=exc) from exc
        except DatabaseError:
            raise
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc

    def _fetchall(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        log_msg: str,
        log_extra: dict[str, object],
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc

    def _find_one_by(self, column: str, value: object) -> Optional[User]:
        # column es controlado por código (no input usuario).
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE {column} = %s",
            params=(value,),
            log_msg=f"PostgresUserRepository: find_by_{column} failed",
            log_extra={column: value},
        )
        return _row_to_user(row) if row else None

    def _exists_by(self, column: str, value: object) -> bool:
        row = self._fetchone(
            query=f"SELECT EXISTS(SELECT 1 FROM users WHERE {column} = %s)",
            params=(value,),
            log_msg=f"PostgresUserRepository: exists_by_{column} failed",
            log_extra={column: value},
        )
        return bool(row and row[0])

    def _find_many(
        self, *, where: str, params: Iterable[object], log_msg: str
    ) -> list[User]:
        rows = self._fetchall(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE {where}
                ORDER BY {_USER_ORDER_BY}
            """,
            params=params,
            log_msg=log_msg,
            log_extra={},
        )
        return [_row_to_user(r) for r in rows]

    def _count(self, *, where: str, params: Iterable[object], log_msg: str) -> int:
        row = self._fetchone(
            query=f"SELECT COUNT(*) FROM users WHERE {where}",
            params=params,
            log_msg=log_msg,
            log_extra={},
        )
        return int(row[0]) if row else 0

    # ============================================================
    # Escritura
    # ============================================================
    def insert(self, user: User) -> User:
        """
        Inserta un usuario y devuelve el registro con id asignado.

        created_at y updated_at comparten el mismo instante salvo que la
        entidad ya los traiga.
        """
        row = self._fetchone(
            query=f"""
                INSERT INTO users (
                    username, email, password_hash, first_name, last_name, role,
                    is_enabled, is_account_non_locked, is_account_non_expired,
                    is_credentials_non_expired, created_at, updated_at, last_login
                )
                VALUES (
                    %s, %s, %s, %s, %s, %s, %s, %s, %s, %s,
                    COALESCE(%s, now()), COALESCE(%s, %s, now()), %s
                )
                RETURNING {_USER_COLUMNS}
            """,
            params=(
                user.username,
                user.email,
                user.password_hash,
                user.first_name,
                user.last_name,
                user.role.value,
                user.is_enabled,
                user.is_account_non_locked,
                user.is_account_non_expired,
                user.is_credentials_non_expired,
                user.created_at,
                user.updated_at,
                user.created_at,
                user.last_login,
            ),
            log_msg="PostgresUserRepository: insert failed",
            log_extra={"username": user.username, "email": user.email},
        )

        if not row:
            raise DatabaseError("PostgresUserRepository: insert returned no row")

        return _row_to_user(row)

    def update(self, user: User) -> Optional[User]:
        """
        Persiste todos los campos mutables del usuario.

        updated_at avanza estrictamente aunque dos updates caigan en el mismo
        instante de reloj. created_at e id nunca se tocan.
        """
        if user.id is None:
            raise ValueError("update() requires a persisted user (id is None)")

        row = self._fetchone(
            query=f"""
                UPDATE users
                SET username = %s,
                    email = %s,
                    password_hash = %s,
                    first_name = %s,
                    last_name = %s,
                    role = %s,
                    is_enabled = %s,
                    is_account_non_locked = %s,
                    is_account_non_expired = %s,
                    is_credentials_non_expired = %s,
                    last_login = %s,
                    updated_at = GREATEST(
                        now(), updated_at + interval '1 microsecond'
                    )
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=(
                user.username,
                user.email,
                user.password_hash,
                user.first_name,
                user.last_name,
                user.role.value,
                user.is_enabled,
                user.is_account_non_locked,
                user.is_account_non_expired,
                user.is_credentials_non_expired,
                user.last_login,
                user.id,
            ),
            log_msg="PostgresUserRepository: update failed",
            log_extra={"user_id": user.id},
        )
        return _row_to_user(row) if row else None

    def delete_by_id(self, user_id: int) -> bool:
        row = self._fetchone(
            query="DELETE FROM users WHERE id = %s RETURNING id",
            params=(user_id,),
            log_msg="PostgresUserRepository: delete_by_id failed",
            log_extra={"user_id": user_id},
        )
        return row is not None

    # ============================================================
    # Lookups
    # ============================================================
    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._find_one_by("id", user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return self._find_one_by("username", username)

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one_by("email", email)

    def find_by_username_or_email(self, identifier: str) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE username = %s OR email = %s
                ORDER BY {_USER_ORDER_BY}
                LIMIT 1
            """,
            params=(identifier, identifier),
            log_msg="PostgresUserRepository: find_by_username_or_email failed",
            log_extra={"identifier": identifier},
        )
        return _row_to_user(row) if row else None

    def exists_by_username(self, username: str) -> bool:
        return self._exists_by("username", username)

    def exists_by_email(self, email: str) -> bool:
        return self._exists_by("email", email)

    def exists_by_id(self, user_id: int) -> bool:
        return self._exists_by("id", user_id)

    # ============================================================
    # Listados
    # ============================================================
    def find_all(self) -> list[User]:
        return self._find_many(
            where="TRUE",
            params=(),
            log_msg="PostgresUserRepository: find_all failed",
        )

    def find_by_role(self, role: UserRole) -> list[User]:
        return self._find_many(
            where="role = %s",
            params=(role.value,),
            log_msg="PostgresUserRepository: find_by_role failed",
        )

    def find_enabled(self) -> list[User]:
        return self._find_many(
            where="is_enabled = TRUE",
            params=(),
            log_msg="PostgresUserRepository: find_enabled failed",
        )

    def find_by_first_name_containing(self, fragment: str) -> list[User]:
        return self._find_many(
            where="LOWER(first_name) LIKE LOWER(%s) ESCAPE '\\'",
            params=(_like_pattern(fragment),),
            log_msg="PostgresUserRepository: find_by_first_name_containing failed",
        )

    def find_by_last_name_containing(self, fragment: str) -> list[User]:
        return self._find_many(
            where="LOWER(last_name) LIKE LOWER(%s) ESCAPE '\\'",
            params=(_like_pattern(fragment),),
            log_msg="PostgresUserRepository: find_by_last_name_containing failed",
        )

    # ============================================================
    # Conteos / salud
    # ============================================================
    def count_by_role(self, role: UserRole) -> int:
        return self._count(
            where="role = %s",
            params=(role.value,),
            log_msg="PostgresUserRepository: count_by_role failed",
        )

    def count_enabled(self) -> int:
        return self._count(
            where="is_enabled = TRUE",
            params=(),
            log_msg="PostgresUserRepository: count_enabled failed",
        )

    def ping(self) -> bool:
        try:
            with self._get_pool().connection() as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except Exception as exc:
            logger.warning(
                "PostgresUserRepository: ping failed", extra={"error": str(exc)}
            )
            return False
