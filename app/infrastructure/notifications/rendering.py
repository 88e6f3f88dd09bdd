"""Message rendering for notifications and pull request comments.

Pure functions: no I/O, no settings lookups. Callers pass the server base
URL and any configurable text explicitly.

The routing URL shape (application vs job detail page) is consumed by the
dashboard router, so the paths and query parameters here must not change.
"""

from typing import Any, Dict, List, Sequence

from infrastructure.notifications.models import IncidentDetected, SuccessfulResource

JOB_KIND = "job"
COMMENT_SUCCESS_LINE = "✅ All changes deployed successfully"
RESOURCES_HEADER = "#### Successfully deployed resources"


def _base(server_base_url: str) -> str:
    return server_base_url.rstrip("/")


def build_routing_url(
    server_base_url: str,
    cluster_name: str,
    namespace: str,
    release_name: str,
    project_id: int,
    object_kind: str,
    object_name: str,
) -> str:
    """Build the dashboard URL an incident notification links to.

    Jobs (``object_kind`` equal to "job", case-insensitively) link to the job
    detail page and carry the job name verbatim as a ``job`` query parameter;
    every other kind links to the application detail page.

    Example:
        >>> build_routing_url("https://dash", "c1", "default", "web", 7, "Job", "nightly")
        'https://dash/jobs/c1/default/web?project_id=7&job=nightly'
    """
    base = _base(server_base_url)
    path = f"{cluster_name}/{namespace}/{release_name}"

    if object_kind.lower() == JOB_KIND:
        return f"{base}/jobs/{path}?project_id={project_id}&job={object_name}"

    return f"{base}/applications/{path}?project_id={project_id}"


def build_resource_url(
    server_base_url: str,
    cluster_name: str,
    namespace: str,
    resource: SuccessfulResource,
    project_id: int,
) -> str:
    """Build the dashboard URL for a deployed resource listed in a PR comment."""
    section = "jobs" if resource.is_job else "applications"
    return (
        f"{_base(server_base_url)}/{section}/{cluster_name}/{namespace}/"
        f"{resource.name}?project_id={project_id}"
    )


def build_deployment_details_url(
    server_base_url: str, namespace: str, environment_id: int
) -> str:
    """Build the preview environment details URL."""
    return (
        f"{_base(server_base_url)}/preview-environments/details/{namespace}"
        f"?environment_id={environment_id}"
    )


def build_commit_url(repo_owner: str, repo_name: str, commit_sha: str) -> str:
    """Build the git hosting URL of a commit."""
    return f"https://github.com/{repo_owner}/{repo_name}/commit/{commit_sha}"


def build_deployment_comment(
    *,
    title: str,
    server_base_url: str,
    cluster_name: str,
    project_id: int,
    namespace: str,
    environment_id: int,
    repo_owner: str,
    repo_name: str,
    commit_sha: str,
    live_url: str,
    build_logs_url: str,
    successful_resources: Sequence[SuccessfulResource] = (),
    ingress_disabled_placeholder: str = "*Ingress is disabled for this deployment*",
) -> str:
    """Render the pull request comment describing a finalized deployment.

    Args:
        title: Comment header text (rendered as a level-2 heading)
        server_base_url: Dashboard base URL
        cluster_name: Cluster the preview environment runs on
        project_id: Tenant project ID
        namespace: Preview environment namespace
        environment_id: Preview environment ID
        repo_owner: Repository owner of the deployed commit
        repo_name: Repository name of the deployed commit
        commit_sha: Deployed commit
        live_url: Deployment subdomain; empty when ingress is disabled
        build_logs_url: HTML URL of the workflow run
        successful_resources: Resources listed under the table
        ingress_disabled_placeholder: Text used when ``live_url`` is empty

    Returns:
        Markdown comment body
    """
    live = live_url or ingress_disabled_placeholder
    commit_url = build_commit_url(repo_owner, repo_name, commit_sha)
    commit_link = f"[`{commit_sha}`]({commit_url})"
    details_url = build_deployment_details_url(
        server_base_url, namespace, environment_id
    )

    lines = [
        f"## {title}",
        COMMENT_SUCCESS_LINE,
        "||Deployment Information|",
        "|-|-|",
        f"| Latest SHA | {commit_link} |",
        f"| Live URL | {live} |",
        f"| Build Logs | {build_logs_url} |",
        f"| Deployment Details | {details_url} |",
    ]
    body = "\n".join(lines)

    if successful_resources:
        bullets = []
        for resource in successful_resources:
            resource_url = build_resource_url(
                server_base_url, cluster_name, namespace, resource, project_id
            )
            bullets.append(f"- [`{resource.name}`]({resource_url})")
        body += "\n" + RESOURCES_HEADER + "\n" + "\n".join(bullets) + "\n"

    return body


def _incident_title(event: IncidentDetected) -> str:
    return event.summary or (
        f"Incident detected for {event.release_name} in {event.namespace}"
    )


def build_incident_chat_message(event: IncidentDetected, url: str) -> Dict[str, Any]:
    """Build the chat payload (fallback text plus Block Kit blocks).

    Returns:
        Dict with ``text`` and ``blocks`` keys, ready for a webhook post
    """
    title = _incident_title(event)
    fields: List[Dict[str, str]] = [
        {"type": "mrkdwn", "text": f"*Release:*\n{event.release_name}"},
        {"type": "mrkdwn", "text": f"*Namespace:*\n{event.namespace}"},
    ]
    if event.involved_object_kind:
        fields.append(
            {
                "type": "mrkdwn",
                "text": (
                    f"*Object:*\n{event.involved_object_kind}/"
                    f"{event.involved_object_name}"
                ),
            }
        )
    for key, value in sorted(event.details.items()):
        fields.append({"type": "mrkdwn", "text": f"*{key}:*\n{value}"})

    blocks: List[Dict[str, Any]] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": f":rotating_light: {title}"},
        },
        # Slack rejects section blocks with more than 10 fields.
        {"type": "section", "fields": fields[:10]},
        {
            "type": "actions",
            "elements": [
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": "View incident"},
                    "url": url,
                }
            ],
        },
    ]
    return {"text": f"{title}: {url}", "blocks": blocks}


def build_incident_email_personalisation(
    event: IncidentDetected, url: str
) -> Dict[str, str]:
    """Build the flat variable map consumed by the incident email template."""
    personalisation = {
        "title": _incident_title(event),
        "release_name": event.release_name,
        "namespace": event.namespace,
        "object_kind": event.involved_object_kind,
        "object_name": event.involved_object_name,
        "incident_id": event.incident_id,
        "url": url,
    }
    personalisation["details"] = "\n".join(
        f"{key}: {value}" for key, value in sorted(event.details.items())
    )
    return personalisation
