"""
Aragon OS / APM / ENS interface ABIs.
"""


def _address_view(name: str) -> dict:
    return {
        "constant": True, "inputs": [], "name": name,
        "outputs": [{"name": "", "type": "address"}],
        "payable": False, "stateMutability": "view", "type": "function",
    }


def _role_view(name: str) -> dict:
    return {
        "constant": True, "inputs": [], "name": name,
        "outputs": [{"name": "", "type": "bytes32"}],
        "payable": False, "stateMutability": "view", "type": "function",
    }


ERC_PROXY_ABI = [
    _address_view("implementation"),
    {"constant": True, "inputs": [], "name": "proxyType", "outputs": [{"name": "", "type": "uint256"}], "payable": False, "stateMutability": "view", "type": "function"},
]

APM_REGISTRY_ABI = [
    _address_view("ens"),
    _address_view("registrar"),
    _address_view("kernel"),
    _role_view("CREATE_REPO_ROLE"),
]

ENS_SUBDOMAIN_REGISTRAR_ABI = [
    _address_view("ens"),
    _address_view("kernel"),
    {"constant": True, "inputs": [], "name": "rootNode", "outputs": [{"name": "", "type": "bytes32"}], "payable": False, "stateMutability": "view", "type": "function"},
    _role_view("CREATE_NAME_ROLE"),
    _role_view("DELETE_NAME_ROLE"),
    _role_view("POINT_ROOTNODE_ROLE"),
]

ENS_ABI = [
    {"constant": True, "inputs": [{"name": "node", "type": "bytes32"}], "name": "owner", "outputs": [{"name": "", "type": "address"}], "payable": False, "stateMutability": "view", "type": "function"},
    {"constant": True, "inputs": [{"name": "node", "type": "bytes32"}], "name": "resolver", "outputs": [{"name": "", "type": "address"}], "payable": False, "stateMutability": "view", "type": "function"},
]

KERNEL_ABI = [
    _address_view("acl"),
    _role_view("APP_MANAGER_ROLE"),
]

ACL_ABI = [
    {"anonymous": False, "inputs": [{"indexed": True, "name": "entity", "type": "address"}, {"indexed": True, "name": "app", "type": "address"}, {"indexed": True, "name": "role", "type": "bytes32"}, {"indexed": False, "name": "allowed", "type": "bool"}], "name": "SetPermission", "type": "event"},
    {"anonymous": False, "inputs": [{"indexed": True, "name": "app", "type": "address"}, {"indexed": True, "name": "role", "type": "bytes32"}, {"indexed": True, "name": "manager", "type": "address"}], "name": "ChangePermissionManager", "type": "event"},
    {"constant": True, "inputs": [{"name": "_who", "type": "address"}, {"name": "_where", "type": "address"}, {"name": "_what", "type": "bytes32"}], "name": "hasPermission", "outputs": [{"name": "", "type": "bool"}], "payable": False, "stateMutability": "view", "type": "function"},
    {"constant": True, "inputs": [{"name": "_app", "type": "address"}, {"name": "_role", "type": "bytes32"}], "name": "getPermissionManager", "outputs": [{"name": "", "type": "address"}], "payable": False, "stateMutability": "view", "type": "function"},
    _role_view("CREATE_PERMISSIONS_ROLE"),
]
