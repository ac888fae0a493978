"""
LidoTemplate ABI fragments used by the scratch deployment scripts.
"""

LIDO_TEMPLATE_ABI = [
    {"anonymous": False, "inputs": [{"indexed": False, "name": "apm", "type": "address"}], "name": "TmplAPMDeployed", "type": "event"},
    {"anonymous": False, "inputs": [{"indexed": False, "name": "dao", "type": "address"}, {"indexed": False, "name": "token", "type": "address"}], "name": "TmplDAOAndTokenDeployed", "type": "event"},
    {"anonymous": False, "inputs": [{"indexed": False, "name": "totalAmount", "type": "uint256"}], "name": "TmplTokensIssued", "type": "event"},
    {
        "constant": False,
        "inputs": [
            {"name": "_holders", "type": "address[]"},
            {"name": "_amounts", "type": "uint256[]"},
            {"name": "_vestingStart", "type": "uint64"},
            {"name": "_vestingCliff", "type": "uint64"},
            {"name": "_vestingEnd", "type": "uint64"},
            {"name": "_vestingRevokable", "type": "bool"},
            {"name": "_expectedFinalTotalSupply", "type": "uint256"},
        ],
        "name": "issueTokens",
        "outputs": [],
        "payable": False,
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {"constant": True, "inputs": [], "name": "getConfig", "outputs": [{"name": "", "type": "address"}, {"name": "", "type": "bytes32"}, {"name": "", "type": "address"}], "payable": False, "stateMutability": "view", "type": "function"},
]
