"""AgentBill resource identity reported with every export batch."""

from agentbill.version import __version__


class AgentBillResource:
    """Resource and instrumentation-scope identity of this SDK."""

    # Resource attribute keys
    SERVICE_NAME = "service.name"
    SERVICE_VERSION = "service.version"

    # Values
    SERVICE_NAME_VALUE = "agentbill-python-sdk"
    SERVICE_VERSION_VALUE = __version__

    # Instrumentation scope
    SCOPE_NAME = "agentbill"
    SCOPE_VERSION = __version__
