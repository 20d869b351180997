# Blueprint package
