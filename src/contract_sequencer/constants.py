"""Configuration constants for contract-sequencer library."""

# Key marking a back-reference in plan documents: {"$ref": "AzbitToken"}
REFERENCE_KEY = "$ref"

DEFAULT_PLAN_FILENAME = "deployment-plan.json"

# Environment variables
PLAN_ENV = "CONTRACT_SEQUENCER_PLAN"
NETWORK_ENV = "CONTRACT_SEQUENCER_NETWORK"

# Compiled artifact locations, relative to the project root
TRUFFLE_ARTIFACTS_DIR = ("build", "contracts")
HARDHAT_ARTIFACTS_DIR = ("artifacts", "contracts")

HTTP_TIMEOUT = 30
