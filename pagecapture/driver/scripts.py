"""JavaScript snippets issued through ``BrowserDriver.execute_script``.

Snippets are function bodies: they read their inputs from ``arguments``
and hand results back with ``return``.
"""

JS_GET_VIEWPORT_SIZE = """
var width = undefined;
var height = undefined;
if (window.innerWidth) {
    width = window.innerWidth;
} else if (document.documentElement && document.documentElement.clientWidth) {
    width = document.documentElement.clientWidth;
} else {
    var b = document.getElementsByTagName('body')[0];
    if (b.clientWidth) { width = b.clientWidth; }
}
if (window.innerHeight) {
    height = window.innerHeight;
} else if (document.documentElement && document.documentElement.clientHeight) {
    height = document.documentElement.clientHeight;
} else {
    var b = document.getElementsByTagName('body')[0];
    if (b.clientHeight) { height = b.clientHeight; }
}
return [width, height];
"""

# scrollHeight may be smaller than clientHeight, so both are reported.
JS_GET_ENTIRE_PAGE_METRICS = """
var doc = document.documentElement;
var body = document.body;
return [
    doc.scrollWidth, body.scrollWidth,
    doc.clientHeight, body.clientHeight,
    doc.scrollHeight, body.scrollHeight
];
"""

JS_GET_SCROLL_POSITION = """
var doc = document.documentElement;
var x = window.scrollX;
var y = window.scrollY;
if (x === undefined || x === null) {
    x = (window.pageXOffset || doc.scrollLeft) - (doc.clientLeft || 0);
}
if (y === undefined || y === null) {
    y = (window.pageYOffset || doc.scrollTop) - (doc.clientTop || 0);
}
return [x, y];
"""

JS_SCROLL_TO = "window.scrollTo(arguments[0], arguments[1]);"

JS_SET_OVERFLOW = """
var origOverflow = document.documentElement.style.overflow;
document.documentElement.style.overflow = arguments[0] === null ? '' : arguments[0];
return origOverflow;
"""

JS_GET_COMPUTED_STYLE = """
var elem = arguments[0];
var styleProp = arguments[1];
if (window.getComputedStyle) {
    return window.getComputedStyle(elem, null).getPropertyValue(styleProp);
} else if (elem.currentStyle) {
    return elem.currentStyle[styleProp];
}
return null;
"""

JS_GET_USER_AGENT = "return navigator.userAgent;"

JS_GET_ORIENTATION = """
if (window.screen && window.screen.orientation) {
    return window.screen.orientation.type;
}
return null;
"""
