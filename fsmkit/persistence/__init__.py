# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
