# This file is part of ec2runner. See LICENSE file for license information.
"""EC2 lifecycle of runner instances."""
