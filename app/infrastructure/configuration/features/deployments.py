"""Preview deployment feature settings."""

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class DeploymentSettings(FeatureSettings):
    """Preview deployment reconciliation configuration.

    Environment Variables:
        WORKFLOW_FILE_TEMPLATE: Workflow file naming convention, formatted
            with ``environment`` (default: porter_{environment}_env.yml)
        COMMENT_TITLE: Header of the pull request comment
        INGRESS_DISABLED_PLACEHOLDER: Live URL text when ingress is disabled

    Example:
        ```python
        from infrastructure.services import get_settings

        deployments = get_settings().deployments
        workflow = deployments.workflow_file_for("staging")
        ```
    """

    WORKFLOW_FILE_TEMPLATE: str = Field(
        default="porter_{environment}_env.yml", alias="WORKFLOW_FILE_TEMPLATE"
    )
    COMMENT_TITLE: str = Field(
        default="Preview Environments", alias="COMMENT_TITLE"
    )
    INGRESS_DISABLED_PLACEHOLDER: str = Field(
        default="*Ingress is disabled for this deployment*",
        alias="INGRESS_DISABLED_PLACEHOLDER",
    )

    def workflow_file_for(self, environment_name: str) -> str:
        """Workflow file name for the given environment."""
        return self.WORKFLOW_FILE_TEMPLATE.format(environment=environment_name)
