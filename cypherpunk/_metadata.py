# Copyright 2019 The cypherpunk developers
#
# This file is part of cypherpunk.
#
# cypherpunk is free software: you can redistribute it and/or modify
# it under the terms of version 3 of the GNU Lesser General Public
# License as published by the Free Software Foundation.
#
# cypherpunk is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with cypherpunk.  If not, see
# <http://www.gnu.org/licenses/>.

__version__ = '0.1.0'
__author__ = 'The cypherpunk developers'
__contact__ = 'cypherpunk@lists.riseup.net'
__url__ = 'https://github.com/cypherpunk-cli/cypherpunk'
__license__ = 'LGPLv3'
__copyright__ = 'Copyright 2019'
