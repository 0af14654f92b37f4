# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

# placed in repository root so pytest puts the root onto python-path (for root-level modules
# and `test._test_utils`)
