from batch_playground.provisioner.provisioner import Provisioner, ProvisioningOutcome

__all__ = ["Provisioner", "ProvisioningOutcome"]
