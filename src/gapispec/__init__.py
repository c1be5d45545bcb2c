"""gapispec -- declarative clients for Google's REST APIs.

A service author describes an API as a nested *resource spec*: a mapping from
resource names to the actions they support, with sub-resources nested inside
their parent's action list. :class:`~gapispec.service.Service` walks that spec
once and exposes one method per (action, resource) pair, named after both,
which issues a single authenticated request when awaited.

Typical usage::

    from gapispec.auth import SharedCredential
    from gapispec.client import AsyncClient
    from gapispec.services import youtube

    credentials = SharedCredential()
    async with AsyncClient(credentials) as client:
        yt = youtube(client)
        videos = await yt.listVideos({"part": "snippet", "chart": "mostPopular"})

Modules:
    service: The service handle and its dispatch table.
    generator: Spec walking, method naming, and argument disambiguation.
    client: The async HTTP client every generated method goes through.
    auth: Credentials, credential providers, and the OAuth2 consent flow.
    services: Ready-made factories for YouTube, Blogger, Calendar, Drive, Plus.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration handling.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr output formatting.
"""

__version__ = "0.3.0"
