"""Master credential provisioning for DB clusters."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .. import metrics
from ..constants import (
    CONNECTION_ENDPOINT_KEY,
    CONNECTION_PASSWORD_KEY,
    CONNECTION_USERNAME_KEY,
    FIELD_MANAGER,
    LABEL_MANAGED_BY,
)
from ..models import ConnectionDetails, DBCluster
from ..utils.errors import (
    ConfigurationError,
    CredentialError,
    NotFoundError,
    PersistenceError,
)
from ..utils.password import generate_password
from ..utils.secrets import SecretStore, decode_secret_value

logger = logging.getLogger(__name__)

ERR_GET_PASSWORD_FAILED = "cannot get password from the given secret"
ERR_GENERATE_PASSWORD_FAILED = "unable to generate a password"
ERR_NO_PASSWORD_SECRET_REF = "no masterUserPasswordSecretRef given, unable to save password"
ERR_GET_SECRET_FAILED = "failed to get Kubernetes secret"
ERR_UPDATE_SECRET_FAILED = "failed to update Kubernetes secret"
ERR_SAVE_SECRET_FAILED = "failed to save generated password to Kubernetes secret"


class CredentialProvisioner:
    """Resolves, generates and persists the master password of a DB cluster.

    A password is generated only when the referenced secret holds none, so at
    most one password is ever generated per resource.
    """

    def __init__(
        self,
        secrets: SecretStore,
        generator: Callable[[], str] = generate_password,
    ) -> None:
        self.secrets = secrets
        self.generator = generator

    def get_password(self, cr: DBCluster) -> str:
        """Read the master password from the referenced secret.

        A missing reference, secret or key yields "".

        Raises:
            CredentialError: If the secret cannot be read
        """
        ref = cr.spec.master_user_password_secret_ref
        if ref is None:
            return ""
        try:
            secret = self.secrets.get(ref.namespace, ref.name)
        except NotFoundError:
            return ""
        except Exception as e:
            raise CredentialError(ERR_GET_PASSWORD_FAILED, e) from e
        return decode_secret_value(secret, ref.key)

    def ensure_password(self, cr: DBCluster) -> str:
        """Resolve the master password, generating and saving one if needed.

        Returns:
            The password; "" when none is stored and autogeneration is off

        Raises:
            CredentialError: If reading or generating the password fails
            ConfigurationError: If a password must be saved but no secret is referenced
            PersistenceError: If saving the generated password fails
        """
        password = self.get_password(cr)
        if password or not cr.spec.autogenerate_password:
            return password

        try:
            password = self.generator()
        except Exception as e:
            raise CredentialError(ERR_GENERATE_PASSWORD_FAILED, e) from e

        try:
            self.save_password(cr, password)
        except PersistenceError as e:
            raise PersistenceError(ERR_SAVE_SECRET_FAILED, e) from e

        metrics.password_generated_total.inc()
        logger.info(f"Generated master password for DBCluster {cr.namespace}/{cr.name}")
        return password

    def save_password(self, cr: DBCluster, password: str) -> None:
        """Store ``password`` under the referenced key, creating the secret if absent."""
        ref = cr.spec.master_user_password_secret_ref
        if ref is None:
            raise ConfigurationError(ERR_NO_PASSWORD_SECRET_REF)

        try:
            self.secrets.get(ref.namespace, ref.name)
            create = False
        except NotFoundError:
            create = True
        except Exception as e:
            raise PersistenceError(ERR_GET_SECRET_FAILED, e) from e

        data = {ref.key: password}
        try:
            if create:
                self.secrets.create(ref.namespace, ref.name, data, labels={LABEL_MANAGED_BY: FIELD_MANAGER})
            else:
                self.secrets.update(ref.namespace, ref.name, data)
        except Exception as e:
            raise PersistenceError(ERR_UPDATE_SECRET_FAILED, e) from e

    def finalize_connection(self, cr: DBCluster, response: dict[str, Any]) -> ConnectionDetails:
        """Build the connection details after a successful create call.

        The secret is re-read because provisioning is asynchronous and the
        stored value may have changed since the create request was shaped.
        When it holds no password, the one revealed by the create response
        is used instead.

        Args:
            cr: DBCluster model
            response: CreateDBCluster response

        Raises:
            CredentialError: If the secret cannot be read
        """
        created = response.get("DBCluster") or {}
        endpoint = cr.at_provider.endpoint or created.get("Endpoint") or ""
        conn: ConnectionDetails = {
            CONNECTION_ENDPOINT_KEY: endpoint.encode("utf-8"),
            CONNECTION_USERNAME_KEY: (cr.spec.master_username or "").encode("utf-8"),
        }

        password = self.get_password(cr)
        if not password:
            pending = created.get("PendingModifiedValues") or {}
            password = pending.get("MasterUserPassword") or ""
        conn[CONNECTION_PASSWORD_KEY] = password.encode("utf-8")
        return conn
