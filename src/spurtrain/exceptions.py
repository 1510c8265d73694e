# Copyright 2024 Gergely Bencsik
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#     http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


class SpurtrainError(Exception):
    """Base class of all errors raised by spurtrain."""


class InvalidParameter(SpurtrainError, ValueError):
    """A gear or curve input is outside of its valid domain
    (e.g. module <= 0, less than 1 tooth, max radius below base radius)."""


class CycleOrDuplicateAttachment(SpurtrainError):
    """Attaching a gear would make it its own pinion, attach it twice,
    or close a loop in the gear tree."""


class ModuleMismatch(SpurtrainError, ValueError):
    """Two gears of different module cannot mesh."""
